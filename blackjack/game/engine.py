"""Multi-player blackjack round engine with state machine."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Callable, NoReturn

from transitions import Machine

from blackjack.cards import Card, Shoe
from blackjack.config import GameConfig
from blackjack.errors import (
    BetExceedsBank,
    GameError,
    IllegalAction,
    InvalidBet,
    InvalidPlayerCount,
    InvalidPlayerIndex,
    ShoeExhausted,
)
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.state import BETWEEN_ROUNDS, RoundState, machine_transitions
from blackjack.hand import Hand
from blackjack.participants import Dealer, Player
from blackjack.schemas import HandView, PlayerView, RoundResult, TableSnapshot
from blackjack.settlement import Outcome, apply_outcome, net_change, settle_hand

logger = logging.getLogger(__name__)


class HitStatus(Enum):
    """What a hit did to the player's hand."""

    CONTINUE = auto()
    BUST = auto()
    BLACKJACK = auto()


@dataclass(frozen=True)
class HitResult:
    """Outcome of a single hit."""

    status: HitStatus
    value: int
    card: Card


class DealerStatus(Enum):
    """Where the dealer stands after one draw."""

    CONTINUE = auto()
    STAND = auto()
    BUST = auto()


@dataclass(frozen=True)
class DealerHitResult:
    """Outcome of a single dealer draw."""

    status: DealerStatus
    value: int
    card: Card


class BlackjackGame:
    """
    Blackjack table engine using a state machine.

    Owns the shoe, the dealer and the seated players for one session. It
    performs no I/O: a presentation layer calls one command per user action
    and reads state back through queries, ``snapshot()`` or events.
    Failed commands raise a ``GameError`` subclass and leave the table as
    it was.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = machine_transitions()

    def __init__(
        self,
        game_config: GameConfig | None = None,
        rng: Random | None = None,
        shoe: Shoe | None = None,
    ) -> None:
        """
        Initialize a new table.

        Args:
            game_config: Table settings (uses defaults if not provided)
            rng: Random number generator for reproducible shuffles
            shoe: Pre-built shoe, used as-is without shuffling
        """
        self.config = game_config or GameConfig()
        if shoe is None:
            shoe = Shoe(num_decks=self.config.num_decks, rng=rng)
            shoe.shuffle()
        self.shoe = shoe

        self.players: list[Player] = []
        self.dealer = Dealer(bank=self.config.dealer_bank)
        self.events = EventEmitter()
        self.round_number = 0

        self._settled = False
        self._results_applied = False

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="setup",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    # -- errors -------------------------------------------------------------

    def _reject(self, error: GameError) -> NoReturn:
        """Report a refused command through events and the log, then raise."""
        if isinstance(error, BetExceedsBank):
            event_type = EventType.INSUFFICIENT_FUNDS
        elif isinstance(error, ShoeExhausted):
            event_type = EventType.SHOE_EXHAUSTED
        else:
            event_type = EventType.INVALID_ACTION
        self.events.emit(event_type, message=str(error), state=self.state.name)
        logger.warning("Rejected: %s", error)
        raise error

    def _player(self, index: int) -> Player:
        if not 0 <= index < len(self.players):
            self._reject(InvalidPlayerIndex(index, len(self.players)))
        return self.players[index]

    def _require_between_rounds(self, action: str) -> None:
        if self.state not in BETWEEN_ROUNDS:
            self._reject(IllegalAction(f"Cannot {action} while a round is in progress"))
        if self.state == RoundState.SETTLEMENT and not self._results_applied:
            self._reject(IllegalAction(f"Cannot {action} before the round is paid out"))

    # -- setup --------------------------------------------------------------

    def create_players(self, count: int) -> None:
        """
        Seat ``count`` new players, replacing any current ones.

        Raises:
            IllegalAction: if a round is in progress or not yet paid out
            InvalidPlayerCount: if count is outside the table limits
        """
        self._require_between_rounds("seat players")
        if not self.config.min_players <= count <= self.config.max_players:
            self._reject(
                InvalidPlayerCount(count, self.config.min_players, self.config.max_players)
            )

        # Cards left on the table go back to the shoe before the seats change
        self._discard_table()
        self.players = [
            Player(bank=self.config.starting_bank, bet=self.config.default_bet)
            for _ in range(count)
        ]
        self.seat_players()
        self.events.emit(EventType.PLAYERS_SEATED, count=count)
        logger.info("Seated %d players", count)

    def set_player_bet(self, index: int, amount: int) -> None:
        """
        Set a player's bet for the next round.

        Raises:
            InvalidPlayerIndex: if index is out of range
            IllegalAction: if a round is in progress or not yet paid out
            InvalidBet: if amount is negative
            BetExceedsBank: if amount is more than the player's bank
        """
        player = self._player(index)
        self._require_between_rounds("change bets")
        if amount < 0:
            self._reject(InvalidBet(amount, index))
        if amount > player.bank:
            self._reject(BetExceedsBank(amount, player.bank, index))
        player.place_bet(amount)
        self.events.emit(EventType.BET_PLACED, player=index, amount=amount)

    # -- dealing ------------------------------------------------------------

    def _draw_to(self, hand: Hand, who: str, face_up: bool = True) -> Card:
        """Deal one card from the shoe into a hand."""
        if self.shoe.needs_reshuffle and self.shoe.discards:
            self.events.emit(EventType.SHOE_RESHUFFLED, cards=self.shoe.discards)
            logger.info("Reshuffling %d discarded cards into the shoe", self.shoe.discards)
        try:
            card = self.shoe.draw()
        except ShoeExhausted as exc:
            self._reject(exc)
        hand.add_card(card)
        self.events.emit(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand=who,
            hand_value=hand.value if face_up else None,
        )
        return card

    def _hands(self) -> list[Hand]:
        return [p.hand for p in self.players] + [self.dealer.hand]

    def deal_cards(self) -> None:
        """
        Start a round: two cards to every player and the dealer.

        Cards go out round-robin, each player in seat order then the dealer,
        twice. The dealer's second card is the hole card.

        Raises:
            IllegalAction: if a round is in progress or hands were not discarded
            InvalidPlayerCount: if no players are seated
            BetExceedsBank: if a carried-over bet is more than the player's bank
            ShoeExhausted: if the shoe cannot supply the deal
        """
        self._require_between_rounds("deal")
        if not self.players:
            self._reject(
                InvalidPlayerCount(0, self.config.min_players, self.config.max_players)
            )
        if any(len(hand) for hand in self._hands()):
            self._reject(IllegalAction("Hands must be discarded before dealing"))
        for i, player in enumerate(self.players):
            if player.bet > player.bank:
                self._reject(BetExceedsBank(player.bet, player.bank, i))
        if self.shoe.cards_remaining + self.shoe.discards < 2 * len(self._hands()):
            self._reject(ShoeExhausted())

        self.start_deal()
        for player in self.players:
            player.reset()
        self.dealer.hand.clear()
        self.round_number += 1
        self._settled = False
        self._results_applied = False
        self.events.emit(EventType.ROUND_STARTED, round=self.round_number)
        logger.info("Round %d: dealing to %d players", self.round_number, len(self.players))

        for deal in range(2):
            for i, player in enumerate(self.players):
                self._draw_to(player.hand, f"player_{i}")
            self._draw_to(self.dealer.hand, "dealer", face_up=deal == 0)

        self.begin_turns()
        for i, player in enumerate(self.players):
            if player.hand.is_blackjack:
                self.events.emit(EventType.PLAYER_BLACKJACK, player=i)
        self._advance_if_players_done()

    # -- player turns -------------------------------------------------------

    def can_player_act(self, index: int) -> bool:
        """Check if a player may hit or stand. False for unknown seats."""
        if not 0 <= index < len(self.players):
            return False
        return self.players[index].can_act

    @property
    def all_players_done(self) -> bool:
        """Check if no seated player can act any more."""
        return not any(p.can_act for p in self.players)

    def _require_turn(self, index: int, action: str) -> Player:
        player = self._player(index)
        if self.state != RoundState.PLAYER_TURNS:
            self._reject(IllegalAction(f"Cannot {action} outside player turns", index))
        if not player.can_act:
            self._reject(IllegalAction(f"Player {index} cannot {action}", index))
        return player

    def player_hit(self, index: int) -> HitResult:
        """
        Draw a card for a player.

        Reaching 21 marks the outcome as blackjack and going over marks it
        as lost; settlement makes the final call.

        Raises:
            InvalidPlayerIndex: if index is out of range
            IllegalAction: if the player cannot act
            ShoeExhausted: if no card is available
        """
        player = self._require_turn(index, "hit")
        card = self._draw_to(player.hand, f"player_{index}")
        value = player.hand.value
        self.events.emit(EventType.PLAYER_HIT, player=index, hand_value=value)

        if value > 21:
            player.outcome = Outcome.LOST
            status = HitStatus.BUST
            self.events.emit(EventType.PLAYER_BUSTS, player=index, hand_value=value)
        elif value == 21:
            player.outcome = Outcome.BLACKJACK
            status = HitStatus.BLACKJACK
        else:
            status = HitStatus.CONTINUE

        self._advance_if_players_done()
        return HitResult(status=status, value=value, card=card)

    def player_stand(self, index: int) -> None:
        """
        End a player's turn.

        Raises:
            InvalidPlayerIndex: if index is out of range
            IllegalAction: if the player cannot act
        """
        player = self._require_turn(index, "stand")
        player.finished = True
        self.events.emit(EventType.PLAYER_STAND, player=index, hand_value=player.hand.value)
        self._advance_if_players_done()

    def _advance_if_players_done(self) -> None:
        if self.state == RoundState.PLAYER_TURNS and self.all_players_done:
            self.reveal_hole_card()
            self.events.emit(
                EventType.DEALER_REVEALS,
                card=str(self.dealer.hand.cards[1]),
                hand_value=self.dealer.hand.value,
            )

    # -- dealer turn --------------------------------------------------------

    def dealer_should_hit(self) -> bool:
        """Dealer draws below the stand total, soft or hard."""
        return self.dealer.hand.value < self.config.dealer_stands_on

    def dealer_hit(self) -> DealerHitResult:
        """
        Draw one card for the dealer without ending the dealer turn.

        Lets a presentation layer reveal the dealer's draws one at a time;
        call ``run_dealer_turn`` afterwards to finish and move to settlement.

        Raises:
            IllegalAction: outside the dealer turn, or if the dealer must stand
            ShoeExhausted: if no card is available
        """
        if self.state != RoundState.DEALER_TURN:
            self._reject(IllegalAction("Dealer plays only after every player is done"))
        if not self.dealer_should_hit():
            self._reject(IllegalAction(f"Dealer stands on {self.dealer.hand.value}"))

        hand = self.dealer.hand
        card = self._draw_to(hand, "dealer")
        self.events.emit(EventType.DEALER_HITS, hand_value=hand.value)

        if hand.is_busted:
            status = DealerStatus.BUST
        elif self.dealer_should_hit():
            status = DealerStatus.CONTINUE
        else:
            status = DealerStatus.STAND
        return DealerHitResult(status=status, value=hand.value, card=card)

    @property
    def dealer_hole_revealed(self) -> bool:
        """Check if the dealer's second card is face up."""
        return self.state in (RoundState.DEALER_TURN, RoundState.SETTLEMENT)

    def run_dealer_turn(self) -> int:
        """
        Play out the rest of the dealer's hand and move to settlement.

        The dealer does not draw when every player has already busted.
        Each draw adds at least one point, so the loop always ends.

        Returns:
            The dealer's final hand value

        Raises:
            IllegalAction: if players are still acting
            ShoeExhausted: if no card is available
        """
        if self.state != RoundState.DEALER_TURN:
            self._reject(IllegalAction("Dealer plays only after every player is done"))

        hand = self.dealer.hand
        if all(p.hand.is_busted for p in self.players):
            logger.debug("Every player busted, dealer stands on %d", hand.value)
        else:
            while self.dealer_should_hit():
                self.dealer_hit()

        if hand.is_busted:
            self.events.emit(EventType.DEALER_BUSTS, hand_value=hand.value)
        else:
            self.events.emit(EventType.DEALER_STANDS, hand_value=hand.value)

        self.finish_dealer()
        return hand.value

    # -- settlement ---------------------------------------------------------

    def settle_round(self) -> list[Outcome]:
        """
        Decide every player's outcome against the dealer's final hand.

        Raises:
            IllegalAction: if the dealer has not played or hands were discarded
        """
        if self.state != RoundState.SETTLEMENT or not len(self.dealer.hand):
            self._reject(IllegalAction("No finished round to settle"))

        outcomes = [settle_hand(p.hand, self.dealer.hand) for p in self.players]
        for player, outcome in zip(self.players, outcomes):
            player.outcome = outcome
        self._settled = True
        return outcomes

    def apply_results(self) -> list[RoundResult]:
        """
        Pay out a settled round.

        Each bet is debited from the player's bank and the payout credited
        back; the dealer's bank takes the other side.

        Raises:
            IllegalAction: if the round is not settled or was already paid
        """
        if not self._settled or self.state != RoundState.SETTLEMENT:
            self._reject(IllegalAction("Round must be settled before paying out"))
        if self._results_applied:
            self._reject(IllegalAction("Round results were already applied"))

        results = []
        for i, player in enumerate(self.players):
            change = net_change(player.bet, player.outcome)
            player.bank = apply_outcome(player.bank, player.bet, player.outcome)
            self.dealer.bank -= change
            result = RoundResult(
                index=i,
                outcome=player.outcome.value,
                net_change=change,
                bank=player.bank,
            )
            results.append(result)
            self.events.emit(
                EventType.BET_RESOLVED,
                player=i,
                outcome=player.outcome.name,
                amount=change,
                bank=player.bank,
            )

        self._results_applied = True
        self.events.emit(
            EventType.ROUND_SETTLED,
            round=self.round_number,
            dealer_value=self.dealer.hand.value,
            dealer_bank=self.dealer.bank,
        )
        logger.info(
            "Round %d settled: %s",
            self.round_number,
            ", ".join(f"P{r.index}={Outcome(r.outcome)}({r.net_change:+d})" for r in results),
        )
        return results

    def _discard_table(self) -> None:
        for player in self.players:
            self.shoe.discard_hand(player.hand)
            player.reset()
        self.shoe.discard_hand(self.dealer.hand)

    def discard_all_hands(self) -> None:
        """
        Return every card on the table to the shoe's discard pile.

        Banks and bets carry over to the next round.

        Raises:
            IllegalAction: during a round, or before a settled round is paid
        """
        self._require_between_rounds("discard hands")
        self._discard_table()
        self.events.emit(EventType.HANDS_DISCARDED, discards=self.shoe.discards)

    # -- queries ------------------------------------------------------------

    @property
    def player_count(self) -> int:
        return len(self.players)

    def get_player_hand(self, index: int) -> Hand:
        """Return a player's hand."""
        return self._player(index).hand

    def get_dealer_hand(self) -> Hand:
        """Return the dealer's hand, hole card included."""
        return self.dealer.hand

    @property
    def dealer_visible_value(self) -> int:
        """Dealer total a player is allowed to see."""
        if self.dealer_hole_revealed:
            return self.dealer.hand.value
        return self.dealer.hand.visible_value

    def snapshot(self) -> TableSnapshot:
        """Describe the table as a presentation layer should see it."""
        dealer_hand = self.dealer.hand
        if self.dealer_hole_revealed:
            dealer_view = HandView.from_hand(dealer_hand)
        else:
            dealer_view = HandView.hole_card_hidden(dealer_hand)

        return TableSnapshot(
            state=self.state.name,
            round_number=self.round_number,
            players=[
                PlayerView(
                    index=i,
                    hand=HandView.from_hand(p.hand),
                    bank=p.bank,
                    bet=p.bet,
                    outcome=p.outcome.value,
                    finished=p.finished,
                    can_act=self.state == RoundState.PLAYER_TURNS and p.can_act,
                )
                for i, p in enumerate(self.players)
            ],
            dealer_hand=dealer_view,
            dealer_bank=self.dealer.bank,
            dealer_hole_revealed=self.dealer_hole_revealed,
            cards_remaining=self.shoe.cards_remaining,
            discards=self.shoe.discards,
        )

"""Query router: classified intent to data source, with degraded fallback."""

import logging
from datetime import date, timedelta
from typing import Any, Callable, Optional

from brokerage_assistant.core.exceptions import (
    AppError,
    ClassificationAmbiguousError,
)
from brokerage_assistant.core.timezone import now_eastern, parse_date
from brokerage_assistant.domain.models import ClassifiedIntent, Intent, TradeSide
from brokerage_assistant.domain.views import QueryResult
from brokerage_assistant.repositories.protocols import BalanceRepository, FeeRepository
from brokerage_assistant.services.ledger_service import LedgerService
from brokerage_assistant.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

SOURCE_LEDGER = "trade_ledger"
SOURCE_BALANCES = "balances"
SOURCE_FEES = "fees"
SOURCE_MARKET_DATA = "market_data"

MAX_ENTITY_LIMIT = 1000


def resolve_date_range(value: Any, today: date) -> tuple[Optional[date], Optional[date]]:
    """
    Turn a classifier date_range entity into (start, end).

    Understands a few relative phrases and "YYYY-MM-DD to YYYY-MM-DD".
    Raises ValueError for anything else.
    """
    text = str(value).strip().lower()
    if text == "today":
        return today, today
    if text == "yesterday":
        day = today - timedelta(days=1)
        return day, day
    if text in ("this week", "past week", "last week", "last 7 days"):
        return today - timedelta(days=7), today
    if text in ("this month", "past month", "last month", "last 30 days"):
        return today - timedelta(days=30), today
    if text in ("this year", "ytd"):
        return date(today.year, 1, 1), today
    if text in ("past year", "last year", "last 12 months"):
        return today - timedelta(days=365), today
    if " to " in text:
        start, end = text.split(" to ", 1)
        return parse_date(start.strip()), parse_date(end.strip())
    day = parse_date(text)
    return day, day


def _int_entity(entities: dict[str, Any], name: str, default: Optional[int]) -> Optional[int]:
    if name not in entities:
        return default
    try:
        value = int(entities[name])
    except (TypeError, ValueError, OverflowError):
        raise ClassificationAmbiguousError(name, f"not an integer: {entities[name]!r}")
    if value <= 0:
        raise ClassificationAmbiguousError(name, "must be positive")
    if value > MAX_ENTITY_LIMIT:
        raise ClassificationAmbiguousError(name, "too large")
    return value


class QueryRouter:
    """
    Route a classified intent to the ledger, balance store, fee store or
    cached market data.

    Ambiguous classifications and data-source failures fall back to a
    bounded, unfiltered read from the matching source and mark the result
    as degraded. Only a failing fallback read propagates.
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        balance_repo: BalanceRepository,
        fee_repo: FeeRepository,
        market_data_service: MarketDataService,
        fallback_limit: int = 10,
        today: Callable[[], date] = lambda: now_eastern().date(),
    ):
        self._ledger = ledger_service
        self._balances = balance_repo
        self._fees = fee_repo
        self._market = market_data_service
        self._fallback_limit = fallback_limit
        self._today = today

    def route(self, intent: Any, entities: Any, account_id: str) -> QueryResult:
        """
        Answer an intent for one account.

        intent and entities may come straight from a classifier; they are
        normalized first, so unknown names route as Intent.UNKNOWN.
        """
        classified = ClassifiedIntent.from_raw({"intent": intent, "entities": entities})
        intent = classified.intent
        entities = dict(classified.entities)

        handlers = {
            Intent.TRADE_HISTORY: (SOURCE_LEDGER, self._trade_history),
            Intent.ACCOUNT_BALANCE: (SOURCE_BALANCES, self._account_balance),
            Intent.FEES: (SOURCE_FEES, self._fee_history),
            Intent.MARKET_DATA: (SOURCE_MARKET_DATA, self._market_data),
        }

        if intent not in handlers:
            return self._fallback(intent, SOURCE_LEDGER, account_id, entities, "unrecognized intent")

        source, handler = handlers[intent]
        try:
            data = handler(account_id, entities)
        except ClassificationAmbiguousError as e:
            return self._fallback(intent, self._fallback_source(source), account_id, entities, e.message)
        except AppError as e:
            logger.warning(f"{source} read failed for intent {intent.value}: {e.message}")
            return self._fallback(intent, self._fallback_source(source), account_id, entities, e.message)

        return QueryResult(intent=intent.value, source=source, data=data, entities=entities)

    # Primary reads

    def _trade_history(self, account_id: str, entities: dict[str, Any]) -> list[Any]:
        side = None
        raw_side = entities.get("trade_type") or entities.get("side")
        if raw_side is not None:
            try:
                side = TradeSide.parse(raw_side)
            except ValueError as e:
                raise ClassificationAmbiguousError(Intent.TRADE_HISTORY.value, str(e))

        start_date, end_date = self._date_filters(entities)
        return self._ledger.list_trades(
            account_id,
            descending=True,
            limit=_int_entity(entities, "limit", None),
            symbol=self._symbol(entities),
            side=side,
            start_date=start_date,
            end_date=end_date,
        )

    def _account_balance(self, account_id: str, entities: dict[str, Any]) -> list[Any]:
        return self._balances.list_balances(account_id, limit=_int_entity(entities, "limit", 2))

    def _fee_history(self, account_id: str, entities: dict[str, Any]) -> list[Any]:
        return self._fees.list_fees(
            account_id,
            limit=_int_entity(entities, "limit", None),
            fee_type=entities.get("fee_type"),
        )

    def _market_data(self, account_id: str, entities: dict[str, Any]) -> list[Any]:
        symbol = self._symbol(entities)
        if not symbol:
            raise ClassificationAmbiguousError(Intent.MARKET_DATA.value, "missing symbol")
        if entities.get("timeframe") or entities.get("data_type") in ("bars", "bar", "chart"):
            return [self._market.get_bars(symbol, timeframe=str(entities.get("timeframe") or "1Day"))]
        return [self._market.get_quote(symbol)]

    # Fallback

    @staticmethod
    def _fallback_source(source: str) -> str:
        # Market data has no unfiltered read; fall back to the ledger
        return SOURCE_LEDGER if source == SOURCE_MARKET_DATA else source

    def _fallback(
        self,
        intent: Intent,
        source: str,
        account_id: str,
        entities: dict[str, Any],
        reason: str,
    ) -> QueryResult:
        logger.warning(f"Falling back to {source} for intent {intent.value}: {reason}")
        limit = self._fallback_limit
        if source == SOURCE_BALANCES:
            data = self._balances.list_balances(account_id, limit=limit)
        elif source == SOURCE_FEES:
            data = self._fees.list_fees(account_id, limit=limit)
        else:
            data = self._ledger.list_trades(account_id, descending=True, limit=limit)

        return QueryResult(
            intent=intent.value,
            source=source,
            data=data,
            entities=entities,
            degraded=True,
            fallback_reason=reason,
        )

    # Entity helpers

    @staticmethod
    def _symbol(entities: dict[str, Any]) -> Optional[str]:
        symbol = entities.get("symbol")
        if isinstance(symbol, list):
            symbol = symbol[0] if symbol else None
        if symbol is None:
            return None
        if not isinstance(symbol, str):
            raise ClassificationAmbiguousError("symbol", f"unexpected value {symbol!r}")
        return symbol.strip().upper() or None

    def _date_filters(self, entities: dict[str, Any]) -> tuple[Optional[date], Optional[date]]:
        try:
            if "date_range" in entities:
                return resolve_date_range(entities["date_range"], self._today())
            start = parse_date(entities.get("start_date") or entities.get("date"))
            end = parse_date(entities.get("end_date") or entities.get("date"))
        except (ValueError, OverflowError) as e:
            raise ClassificationAmbiguousError("date", str(e))
        return start, end

#!/usr/bin/env python3
"""
Generate realistic sample data for the last 3 months.
Simulates one brokerage account: daily balances, weekly buys, a few
profit-taking sells and the matching commission postings.

Usage (with the package installed):
  python scripts/generate_test_data.py [--account LS123456] [--days 90] [--seed 7]
"""

import argparse
import random
import sys
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from brokerage_assistant.config.settings import get_settings
from brokerage_assistant.repositories.sqlalchemy.database import get_session, init_db
from brokerage_assistant.repositories.sqlalchemy.orm_models import (
    BalanceORM,
    FeeORM,
    TradeORM,
)

# Symbols with approximate prices
STOCKS = [
    ("AAPL", 180.0),
    ("MSFT", 420.0),
    ("GOOGL", 160.0),
    ("AMZN", 150.0),
    ("TSLA", 250.0),
    ("NVDA", 500.0),
]

COMMISSION = Decimal("1.00")
CENTS = Decimal("0.01")


def _money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(CENTS)


def generate_realistic_data(account_code: str, days: int, seed: int) -> None:
    """Write trades, balances and fees for one account into the configured database."""
    rng = random.Random(seed)
    today = date.today()
    start_date = today - timedelta(days=days)

    print(f"Generating data for {account_code} from {start_date} to {today}")
    print("=" * 60)

    cash = Decimal("50000.00")
    shares = {symbol: Decimal("0") for symbol, _ in STOCKS}
    prices = {symbol: base for symbol, base in STOCKS}

    trades: list[TradeORM] = []
    fees: list[FeeORM] = []
    balances: list[BalanceORM] = []
    seq = 0

    current = start_date
    while current <= today:
        if current.weekday() < 5:
            # Random walk of the day's prices
            for symbol in prices:
                prices[symbol] *= rng.uniform(0.98, 1.02)

            # Weekly buy every Monday
            if current.weekday() == 0:
                symbol = rng.choice(STOCKS)[0]
                price = _money(prices[symbol])
                qty = Decimal(str(round(2000 / float(price), 4)))
                cost = (qty * price).quantize(CENTS)
                if cash >= cost + COMMISSION:
                    seq += 1
                    trades.append(_trade(account_code, current, seq, "B", symbol, qty, price, rng))
                    fees.append(_commission(account_code, current, seq, symbol))
                    cash -= cost + COMMISSION
                    shares[symbol] += qty

            # Occasional take-profit sell
            held = [s for s, q in shares.items() if q > 0]
            if held and rng.random() < 0.08:
                symbol = rng.choice(held)
                price = _money(prices[symbol])
                qty = Decimal(str(round(float(shares[symbol]) * rng.uniform(0.2, 0.5), 4)))
                if qty > Decimal("0.0001"):
                    seq += 1
                    trades.append(_trade(account_code, current, seq, "S", symbol, qty, price, rng))
                    fees.append(_commission(account_code, current, seq, symbol))
                    cash += (qty * price).quantize(CENTS) - COMMISSION
                    shares[symbol] -= qty

            lmv = sum(
                ((q * _money(prices[s])).quantize(CENTS) for s, q in shares.items()),
                Decimal("0"),
            )
            balances.append(
                BalanceORM(
                    account_code=account_code,
                    date=current,
                    cash_balance=cash,
                    stock_lmv=lmv,
                    stock_smv=Decimal("0"),
                    options_lmv=Decimal("0"),
                    options_smv=Decimal("0"),
                    account_equity=cash + lmv,
                )
            )
        current += timedelta(days=1)

    init_db()
    db = get_session()
    try:
        db.add_all(trades + fees + balances)
        db.commit()
    finally:
        db.close()

    print(f"✓ Created {len(trades)} trades, {len(fees)} fees, {len(balances)} balances")
    print("\nCurrent positions:")
    for symbol, qty in shares.items():
        if qty > 0:
            print(f"  {symbol}: {qty:.4f} shares")
    print(f"\nCash balance: ${cash:,.2f}")
    print("\nYou can now:")
    print("  - View trades: GET /trades")
    print("  - View portfolio: GET /portfolio")
    print("  - Ask a question: POST /query")


def _trade(account_code, day, seq, side, symbol, qty, price, rng) -> TradeORM:
    gross = (qty * price).quantize(CENTS)
    net = -(gross + COMMISSION) if side == "B" else gross - COMMISSION
    executed = datetime.combine(day, time(rng.randint(9, 15), rng.randint(0, 59)))
    return TradeORM(
        account_code=account_code,
        date=day,
        trade_id=f"T{seq:06d}",
        trade_type=side,
        trade_timestamp=executed,
        security_type="S",
        symbol=symbol,
        stock_trade_price=price,
        stock_share_qty=qty,
        gross_amount=gross,
        commission=COMMISSION,
        net_amount=net,
    )


def _commission(account_code, day, seq, symbol) -> FeeORM:
    return FeeORM(
        account_code=account_code,
        date=day,
        transaction_id=f"F{seq:06d}",
        type="commission",
        symbol=symbol,
        amount=-COMMISSION,
        details=f"T{seq:06d}",
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--account", default=get_settings().default_account_id)
    parser.add_argument("--days", type=int, default=90)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()
    try:
        generate_realistic_data(args.account, args.days, args.seed)
    except Exception as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)

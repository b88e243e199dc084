"""
networth — Household Net-Worth Projection

Projects a household's assets, liabilities and monthly savings forward
in time from a single snapshot, with automatic stock investment and
debt amortization.

Modules
-------
- assets        : Cash, growth and stock asset records
- liabilities   : Debts and per-step amortization
- cashflow      : Income, expenses, investment policy, monthly figures
- pricing       : Stock price resolution from date-anchored targets
- valuation     : Asset value at a simulated date
- projection    : Snapshot, projection engine and output points
- market_data   : Price providers, caches and exchange rates
- config        : Pydantic input models and environment settings
- serialization : Snapshot / projection files
- plotting      : Projection charts
- cli           : Command-line interface

"""

from .assets import CashAsset, GrowthAsset, StockAsset, StockTarget
from .cashflow import Expense, Income, InvestmentPolicy
from .liabilities import Liability
from .projection import ProjectionEngine, ProjectionPoint, Snapshot, project
from . import utils

__version__ = "0.1.0"

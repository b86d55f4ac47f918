"""
Budget allocation tables and enumerations.

Income is split 50/30/15/5 into four pools (needs, wants, savings, growth);
each pool is then spread over its categories using per-bracket fractions.
Amounts are in whole currency units (KES).
"""
from decimal import Decimal

CATEGORY_TYPE_NEEDS = "needs"
CATEGORY_TYPE_WANTS = "wants"
CATEGORY_TYPE_SAVINGS = "savings"
CATEGORY_TYPE_GROWTH = "growth"

CATEGORY_TYPES = (
    CATEGORY_TYPE_NEEDS,
    CATEGORY_TYPE_WANTS,
    CATEGORY_TYPE_SAVINGS,
    CATEGORY_TYPE_GROWTH,
)

# Must sum to 1
BUDGET_ALLOCATION = {
    CATEGORY_TYPE_NEEDS: Decimal("0.50"),    # essentials
    CATEGORY_TYPE_WANTS: Decimal("0.30"),    # lifestyle
    CATEGORY_TYPE_SAVINGS: Decimal("0.15"),  # emergency fund, education
    CATEGORY_TYPE_GROWTH: Decimal("0.05"),   # pension (IPP), investments
}

# IPP (Individual Pension Plan)
IPP_TAX_RELIEF_RATE = Decimal("0.30")
IPP_DEFAULT_CONTRIBUTION_RATE = Decimal("0.05")

# Income brackets: (upper bound inclusive, bracket); anything above is "high"
BRACKET_LOW = "low"
BRACKET_MIDDLE = "middle"
BRACKET_UPPER = "upper"
BRACKET_HIGH = "high"

INCOME_BRACKETS = [
    (Decimal("50000"), BRACKET_LOW),
    (Decimal("100000"), BRACKET_MIDDLE),
    (Decimal("200000"), BRACKET_UPPER),
]

BRACKET_LABELS = {
    BRACKET_LOW: "Low Income",
    BRACKET_MIDDLE: "Middle Income",
    BRACKET_UPPER: "Upper Middle Income",
    BRACKET_HIGH: "High Income",
}

# Default categories per pool, in output order
DEFAULT_CATEGORIES = {
    CATEGORY_TYPE_NEEDS: [
        "Rent/Mortgage",
        "Food & Groceries",
        "Transport",
        "Utilities (Water, Electricity)",
        "Insurance",
    ],
    CATEGORY_TYPE_WANTS: [
        "Entertainment",
        "Dining Out",
        "Personal Care",
        "Hobbies & Recreation",
    ],
    CATEGORY_TYPE_SAVINGS: [
        "Emergency Fund",
    ],
    CATEGORY_TYPE_GROWTH: [
        "Pension (IPP)",
    ],
}

# Added only for households with dependents
DEPENDENT_CATEGORIES = {
    CATEGORY_TYPE_NEEDS: [
        "School Fees",
        "Medical & Healthcare",
    ],
    CATEGORY_TYPE_SAVINGS: [
        "Children's Education Fund",
    ],
}


def _fractions(low: str, middle: str, upper: str, high: str) -> dict[str, Decimal]:
    return {
        BRACKET_LOW: Decimal(low),
        BRACKET_MIDDLE: Decimal(middle),
        BRACKET_UPPER: Decimal(upper),
        BRACKET_HIGH: Decimal(high),
    }


# Share of the pool per category and bracket. Growth has no table:
# its single category takes the whole pool.
CATEGORY_ALLOCATION_SUGGESTIONS = {
    CATEGORY_TYPE_NEEDS: {
        "Rent/Mortgage": _fractions("0.35", "0.30", "0.25", "0.20"),
        "Food & Groceries": _fractions("0.25", "0.20", "0.15", "0.12"),
        "Transport": _fractions("0.15", "0.15", "0.12", "0.10"),
        "Utilities (Water, Electricity)": _fractions("0.10", "0.10", "0.08", "0.06"),
        "Insurance": _fractions("0.05", "0.08", "0.10", "0.12"),
        "School Fees": _fractions("0.10", "0.15", "0.20", "0.25"),
        "Medical & Healthcare": _fractions("0.05", "0.07", "0.10", "0.15"),
    },
    CATEGORY_TYPE_WANTS: {
        "Entertainment": _fractions("0.30", "0.30", "0.25", "0.25"),
        "Dining Out": _fractions("0.30", "0.35", "0.35", "0.35"),
        "Personal Care": _fractions("0.20", "0.20", "0.20", "0.20"),
        "Hobbies & Recreation": _fractions("0.20", "0.15", "0.20", "0.20"),
    },
    CATEGORY_TYPE_SAVINGS: {
        "Emergency Fund": _fractions("0.60", "0.55", "0.50", "0.50"),
        "Children's Education Fund": _fractions("0.40", "0.45", "0.50", "0.50"),
    },
}

# Default savings goals created at onboarding
EMERGENCY_FUND_GOAL = "Emergency Fund"
EMERGENCY_FUND_MONTHS = 6
EMERGENCY_FUND_MONTHLY_RATE = Decimal("0.10")
EDUCATION_GOAL = "Children's Education"
EDUCATION_GOAL_TARGET = Decimal("500000")
EDUCATION_GOAL_MONTHLY_RATE = Decimal("0.05")

# Profile edits beyond this relative income change suggest regenerating categories
SIGNIFICANT_INCOME_CHANGE = Decimal("0.10")

# Transactions
TX_TYPE_EXPENSE = "expense"
TX_TYPE_SAVING = "saving"
TX_TYPE_IPP = "ipp"
TX_TYPE_ASSET = "asset"
TX_TYPE_LIABILITY = "liability"

TRANSACTION_TYPES = (
    TX_TYPE_EXPENSE,
    TX_TYPE_SAVING,
    TX_TYPE_IPP,
    TX_TYPE_ASSET,
    TX_TYPE_LIABILITY,
)

# Asset ledger
ASSET_TYPE_ASSET = "asset"
ASSET_TYPE_LIABILITY = "liability"
ASSET_TYPES = (ASSET_TYPE_ASSET, ASSET_TYPE_LIABILITY)

ASSET_CATEGORIES = {
    "cash": "Cash",
    "savings": "Savings Account",
    "pension": "Pension/IPP",
    "investments": "Investments",
    "property": "Property",
    "other": "Other",
}

LIABILITY_CATEGORIES = {
    "loan": "Personal Loan",
    "mortgage": "Mortgage",
    "credit": "Credit Card",
    "mobile-loan": "Mobile Loan",
    "other": "Other",
}

INVESTMENT_TYPES = {
    "money-market": "Money Market Fund",
    "unit-trust": "Unit Trust",
    "government-bond": "Government Bond (M-Akiba, T-Bills)",
    "stock": "Stock (NSE)",
    "sacco": "SACCO",
    "reit": "REIT",
    "other": "Other",
}

INCOME_SOURCES = [
    "Freelance Work",
    "Consulting",
    "Side Business",
    "Bonus",
    "Commission",
    "Rental Income",
    "Other",
]

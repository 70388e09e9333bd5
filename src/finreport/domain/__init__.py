"""Domain layer for finreport application."""

# Services are imported lazily so that the database layer can import
# finreport.domain.entities without pulling the services back in.
_SERVICES = {
    "AccountService": "finreport.domain.account",
    "JournalService": "finreport.domain.journal",
    "BalanceService": "finreport.domain.balance",
    "GeneralLedgerService": "finreport.domain.general_ledger",
    "TrialBalanceService": "finreport.domain.trial_balance",
    "BalanceSheetService": "finreport.domain.balance_sheet",
    "IncomeStatementService": "finreport.domain.income_statement",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

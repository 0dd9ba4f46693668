"""Budget setup wizard and its handoff to the tracker."""

from lunch.onboarding.handoff import PreferencesStore, apply_budget_setup
from lunch.onboarding.wizard import BudgetSetupResult, BudgetSetupState, BudgetSetupWizard

__all__ = [
    "BudgetSetupResult",
    "BudgetSetupState",
    "BudgetSetupWizard",
    "PreferencesStore",
    "apply_budget_setup",
]

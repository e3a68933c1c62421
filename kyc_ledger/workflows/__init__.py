"""Customer verification and bank administration workflows."""

from kyc_ledger.workflows.administration import AdministrationWorkflow
from kyc_ledger.workflows.verification import Notify, VerificationWorkflow

__all__ = ["AdministrationWorkflow", "Notify", "VerificationWorkflow"]

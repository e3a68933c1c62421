"""Enumeration types for the KYC ledger."""

from enum import Enum


class Operation(str, Enum):
    """Mutating operations, named as they appear in the audit trail."""

    ADD_KYC_REQUEST = "addKYCRequest"
    REMOVE_KYC_REQUEST = "removeKYCRequest"
    ADD_CUSTOMER = "addCustomer"
    REMOVE_CUSTOMER = "removeCustomer"
    MODIFY_CUSTOMER = "modifyCustomer"
    UPVOTE_CUSTOMER = "upvoteCustomer"
    DOWNVOTE_CUSTOMER = "downvoteCustomer"
    ADD_BANK = "addBank"
    MODIFY_BANK_KYC_PERMISSION = "modifyBankKYCPermission"
    REMOVE_BANK = "removeBank"


class ViolationKind(str, Enum):
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    NOT_PERMITTED = "NOT_PERMITTED"
    INVALID_INPUT = "INVALID_INPUT"

from rest_framework import status

from common.exceptions import ApplicationError


class WalletNotFound(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND


class InsufficientFunds(ApplicationError):
    pass


class InvalidTransactionState(ApplicationError):
    status_code = status.HTTP_409_CONFLICT


class DuplicateReference(ApplicationError):
    status_code = status.HTTP_409_CONFLICT


class BonusNotAvailable(ApplicationError):
    pass

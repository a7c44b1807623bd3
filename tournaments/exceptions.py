from rest_framework import status

from common.exceptions import ApplicationError


class TournamentNotOpen(ApplicationError):
    pass


class AlreadyJoined(ApplicationError):
    status_code = status.HTTP_409_CONFLICT


class TournamentFull(ApplicationError):
    status_code = status.HTTP_409_CONFLICT


class InvalidStateTransition(ApplicationError):
    status_code = status.HTTP_409_CONFLICT


class InvalidWinner(ApplicationError):
    pass

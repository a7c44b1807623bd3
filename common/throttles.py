from rest_framework.throttling import SimpleRateThrottle, UserRateThrottle


class VeryStrictThrottle(UserRateThrottle):
    """
    Limits requests to 1 per minute.
    Used for money movement requests such as deposits and withdrawals.
    """
    scope = 'very_strict'


class StrictThrottle(UserRateThrottle):
    """
    Limits requests to 10 per minute.
    Used for joining tournaments and claiming bonuses.
    """
    scope = 'strict'


class MediumThrottle(UserRateThrottle):
    """
    Limits requests to 100 per 10 minutes.
    Used for listing wallets, transactions and tournaments.
    """
    scope = 'medium'


class SchedulerThrottle(SimpleRateThrottle):
    """Caps the unauthenticated scheduler trigger, keyed by client IP."""
    scope = 'scheduler'

    def get_cache_key(self, request, view):
        return self.cache_format % {
            'scope': self.scope,
            'ident': self.get_ident(request),
        }

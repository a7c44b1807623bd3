import django_filters

from .models import Tournament


class TournamentFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(lookup_expr="icontains")
    game = django_filters.CharFilter(lookup_expr="iexact")
    is_free = django_filters.BooleanFilter(method="filter_is_free")
    ordering = django_filters.OrderingFilter(
        fields=(
            ("title", "title"),
            ("start_date", "start_date"),
            ("entry_fee", "entry_fee"),
            ("current_prize_pool", "current_prize_pool"),
        )
    )

    class Meta:
        model = Tournament
        fields = {
            "status": ["exact"],
            "tournament_type": ["exact"],
            "organizer": ["exact"],
            "start_date": ["gte", "lte"],
        }

    def filter_is_free(self, queryset, name, value):
        if value:
            return queryset.filter(entry_fee=0)
        return queryset.filter(entry_fee__gt=0)

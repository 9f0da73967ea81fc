from django_filters import rest_framework as filters

from .models import Guest


class GuestFilter(filters.FilterSet):
    room_number = filters.CharFilter(field_name='room__room_number')
    check_in_after = filters.DateFilter(field_name='check_in_date', lookup_expr='gte')
    check_in_before = filters.DateFilter(field_name='check_in_date', lookup_expr='lte')

    class Meta:
        model = Guest
        fields = ['status', 'room']

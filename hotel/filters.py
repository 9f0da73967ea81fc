from django_filters import rest_framework as filters

from .models import Room, HotelDocument, RoomServiceItem


class RoomFilter(filters.FilterSet):
    occupied = filters.BooleanFilter(method='filter_occupied')

    class Meta:
        model = Room
        fields = ['status', 'floor_number', 'room_type', 'is_active']

    def filter_occupied(self, queryset, name, value):
        if value is True:
            return queryset.filter(status='occupied')
        elif value is False:
            return queryset.exclude(status='occupied')
        return queryset


class HotelDocumentFilter(filters.FilterSet):
    file_type = filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = HotelDocument
        fields = ['file_type', 'processed']


class RoomServiceItemFilter(filters.FilterSet):
    min_price = filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='price', lookup_expr='lte')

    class Meta:
        model = RoomServiceItem
        fields = ['available']

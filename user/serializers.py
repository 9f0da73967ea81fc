from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import User


class UserSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=False)
    hotel_name = serializers.CharField(source='hotel.name', read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name', 'user_type',
            'phone_number', 'department', 'password', 'hotel', 'hotel_name',
            'created_by', 'is_active_hotel_user', 'created_at',
        ]
        read_only_fields = ['hotel', 'created_by', 'is_active_hotel_user', 'created_at']

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def validate_user_type(self, value):
        # Hotel admins are provisioned by the platform, not by other staff
        if value == 'hotel_admin' and self.instance is None:
            raise serializers.ValidationError("Hotel admins cannot be created through staff management.")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': ["This field is required."]})
        return attrs

    def create(self, validated_data):
        department = validated_data.get('department')
        user_type = validated_data.get('user_type')

        if not department:
            if user_type == 'receptionist':
                department = 'Reception'
            elif user_type == 'manager':
                department = 'Management'
            else:
                department = ''

        password = validated_data.pop('password')
        validated_data['department'] = department
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        if password:
            instance.set_password(password)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class MyTokenObtainPairSerializer(TokenObtainPairSerializer):

    def validate(self, attrs):
        data = super().validate(attrs)

        if not self.user.is_superuser and not self.user.is_active_hotel_user:
            raise AuthenticationFailed(
                'This staff account has been deactivated.',
                code='account_deactivated'
            )

        user_data = UserSerializer(self.user).data
        if self.user.hotel_id:
            user_data['hotel_id'] = str(self.user.hotel_id)
            user_data['hotel_name'] = self.user.hotel.name
        data['user'] = user_data
        return data

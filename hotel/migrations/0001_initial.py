import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Hotel',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('slug', models.SlugField(blank=True, max_length=220, unique=True)),
                ('base_url', models.URLField(blank=True, help_text='Site that serves the guest chat page. Blank uses the default chat site.')),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('address', models.TextField(blank=True)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('website', models.URLField(blank=True)),
                ('tagline', models.CharField(blank=True, max_length=255)),
                ('description', models.TextField(blank=True)),
                ('primary_color', models.CharField(default='#1f2937', max_length=20)),
                ('secondary_color', models.CharField(default='#374151', max_length=20)),
                ('accent_color', models.CharField(default='#2563eb', max_length=20)),
                ('background_color', models.CharField(default='#ffffff', max_length=20)),
                ('text_color', models.CharField(default='#111827', max_length=20)),
                ('logo_url', models.URLField(blank=True)),
                ('hero_image_url', models.URLField(blank=True)),
                ('features', models.JSONField(blank=True, default=list)),
                ('amenities', models.JSONField(blank=True, default=list)),
                ('social_media', models.JSONField(blank=True, default=dict)),
                ('timezone', models.CharField(default='UTC', max_length=50)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('room_number', models.CharField(max_length=20)),
                ('room_type', models.CharField(default='standard', max_length=50)),
                ('floor_number', models.IntegerField(blank=True, null=True)),
                ('capacity', models.PositiveIntegerField(default=2)),
                ('base_price', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('status', models.CharField(choices=[('available', 'Available'), ('occupied', 'Occupied'), ('cleaning', 'Under Cleaning'), ('maintenance', 'Under Maintenance')], default='available', max_length=20)),
                ('amenities', models.JSONField(blank=True, default=list)),
                ('notes', models.TextField(blank=True)),
                ('is_active', models.BooleanField(default=True)),
                ('last_cleaned_at', models.DateTimeField(blank=True, null=True)),
                ('qr_session_id', models.UUIDField(blank=True, null=True)),
                ('qr_code_url', models.URLField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('hotel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rooms', to='hotel.hotel')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['hotel', 'floor_number'], name='room_hotel_floor_idx'),
                    models.Index(fields=['hotel', 'status'], name='room_hotel_status_idx'),
                ],
                'unique_together': {('hotel', 'room_number')},
            },
        ),
    ]

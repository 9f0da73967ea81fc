import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('hotel', '0002_hoteldocument'),
    ]

    operations = [
        migrations.CreateModel(
            name='RoomServiceItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('available', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('hotel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='room_service_items', to='hotel.hotel')),
            ],
            options={
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['hotel', 'available'], name='roomservice_hotel_avail_idx'),
                ],
            },
        ),
    ]

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('hotel', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ChatEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('hotel_id_raw', models.CharField(db_index=True, max_length=64)),
                ('session_id', models.CharField(db_index=True, max_length=128)),
                ('room_number', models.CharField(blank=True, max_length=20)),
                ('event_type', models.CharField(max_length=100)),
                ('message', models.TextField(blank=True)),
                ('occurred_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-occurred_at'],
                'indexes': [models.Index(fields=['hotel_id_raw', 'occurred_at'], name='chatevent_hotel_time_idx')],
            },
        ),
        migrations.CreateModel(
            name='ChatSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('hotel_id_raw', models.CharField(db_index=True, max_length=64)),
                ('room_number', models.CharField(blank=True, max_length=20)),
                ('session_id', models.CharField(db_index=True, max_length=128)),
                ('hotel_name', models.CharField(blank=True, max_length=200)),
                ('guest_name', models.CharField(blank=True, max_length=200)),
                ('reservation_id', models.CharField(blank=True, max_length=100)),
                ('source', models.CharField(default='qr_code', max_length=50)),
                ('user_id', models.CharField(blank=True, db_index=True, max_length=128)),
                ('original_session_id', models.CharField(blank=True, max_length=128)),
                ('user_agent', models.TextField(blank=True)),
                ('expires_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('hotel', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='chat_sessions', to='hotel.hotel')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['hotel', 'created_at'], name='chatsession_hotel_created_idx')],
            },
        ),
    ]

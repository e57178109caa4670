# Generated manually
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='AssetUnit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('asset_tag', models.CharField(db_index=True, max_length=100, unique=True)),
                ('office_location', models.CharField(choices=[('dallas', 'Dallas'), ('miami', 'Miami'), ('phoenix', 'Phoenix'), ('minneapolis', 'Minneapolis')], db_index=True, max_length=20)),
                ('status', models.CharField(choices=[('available', 'Available'), ('rented', 'Rented'), ('maintenance', 'Maintenance')], db_index=True, default='available', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='asset_units', to='catalog.catalogitem')),
            ],
            options={
                'db_table': 'asset_units',
                'ordering': ['asset_tag'],
                'indexes': [models.Index(fields=['item', 'office_location', 'status'], name='idx_unit_item_office_status')],
            },
        ),
    ]

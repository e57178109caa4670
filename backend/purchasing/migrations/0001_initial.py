# Generated manually
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('parties', '0001_initial'),
        ('quotes', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Subrental',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('description', models.CharField(blank=True, max_length=255)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('cost_cents', models.BigIntegerField(default=0)),
                ('status', models.CharField(choices=[('requested', 'Requested'), ('confirmed', 'Confirmed'), ('received', 'Received'), ('returned', 'Returned')], db_index=True, default='requested', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='subrentals', to=settings.AUTH_USER_MODEL)),
                ('item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='subrentals', to='catalog.catalogitem')),
                ('quote', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subrentals', to='quotes.quote')),
                ('vendor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='subrentals', to='parties.vendor')),
            ],
            options={
                'db_table': 'subrentals',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['quote', 'status'], name='idx_subrental_quote_status')],
            },
        ),
        migrations.CreateModel(
            name='JobCost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('vendor_category', models.CharField(choices=[('audio', 'Audio'), ('lighting', 'Lighting'), ('video', 'Video'), ('staging', 'Staging'), ('transport', 'Transport'), ('labor', 'Labor'), ('other', 'Other')], max_length=20)),
                ('projected_cost_cents', models.BigIntegerField(default=0)),
                ('actual_cost_cents', models.BigIntegerField(default=0)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('quote', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='costs', to='quotes.quote')),
                ('vendor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='job_costs', to='parties.vendor')),
            ],
            options={
                'db_table': 'job_costs',
                'ordering': ['quote', 'vendor_category', 'id'],
            },
        ),
    ]

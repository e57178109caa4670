# Generated manually
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('parties', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Quote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference_number', models.CharField(max_length=100, unique=True)),
                ('event_start_date', models.DateField(db_index=True)),
                ('event_end_date', models.DateField(blank=True, null=True)),
                ('office', models.CharField(choices=[('dallas', 'Dallas'), ('miami', 'Miami'), ('phoenix', 'Phoenix'), ('minneapolis', 'Minneapolis')], db_index=True, max_length=20)),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('sent', 'Sent'), ('approved', 'Approved'), ('rejected', 'Rejected')], db_index=True, default='draft', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('subtotal_cents', models.BigIntegerField(default=0)),
                ('tax_cents', models.BigIntegerField(default=0)),
                ('total_cents', models.BigIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='quotes', to='parties.client')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quotes', to=settings.AUTH_USER_MODEL)),
                ('venue', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quotes', to='parties.venue')),
            ],
            options={
                'db_table': 'quotes',
                'ordering': ['-event_start_date', '-id'],
                'indexes': [models.Index(fields=['status', 'office'], name='idx_quote_status_office')],
            },
        ),
        migrations.CreateModel(
            name='QuoteSection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=200)),
                ('tax_enabled', models.BooleanField(default=False)),
                ('tax_rate', models.PositiveIntegerField(default=0, help_text='Whole percent, e.g. 8 for 8%')),
                ('subtotal_cents', models.BigIntegerField(default=0)),
                ('tax_cents', models.BigIntegerField(default=0)),
                ('total_cents', models.BigIntegerField(default=0)),
                ('quote', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sections', to='quotes.quote')),
            ],
            options={
                'db_table': 'quote_sections',
                'ordering': ['position', 'id'],
            },
        ),
        migrations.CreateModel(
            name='QuoteItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('price_per_day_cents', models.BigIntegerField(default=0)),
                ('number_of_days', models.PositiveIntegerField(default=1)),
                ('is_custom', models.BooleanField(default=False)),
                ('description', models.TextField(blank=True)),
                ('custom_name', models.CharField(blank=True, max_length=200)),
                ('custom_category', models.CharField(blank=True, max_length=100)),
                ('equipment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='quote_items', to='catalog.catalogitem')),
                ('section', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='quotes.quotesection')),
            ],
            options={
                'db_table': 'quote_items',
                'ordering': ['position', 'id'],
            },
        ),
    ]

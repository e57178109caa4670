# Generated manually
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CatalogItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('category', models.CharField(choices=[('lighting', 'Lighting'), ('audio', 'Audio'), ('video', 'Video'), ('cable', 'Cable'), ('drape', 'Drape'), ('miscellaneous', 'Miscellaneous')], db_index=True, max_length=20)),
                ('price_per_day_cents', models.BigIntegerField(default=0)),
                ('description', models.TextField(blank=True)),
                ('photo', models.URLField(blank=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'catalog_items',
                'ordering': ['name'],
            },
        ),
    ]

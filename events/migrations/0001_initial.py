import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Title of the event', max_length=200, validators=[django.core.validators.MinLengthValidator(3)])),
                ('slug', models.SlugField(editable=False, help_text='URL identifier derived from the title. Never set by hand.', max_length=100, unique=True)),
                ('description', models.TextField(help_text='Short description shown at the top of the event page')),
                ('overview', models.TextField(help_text='Longer overview of what the event is about')),
                ('image', models.CharField(help_text='URL of the event poster', max_length=500)),
                ('venue', models.CharField(help_text='Name of the venue', max_length=200)),
                ('location', models.CharField(help_text='City, region or address of the event', max_length=200)),
                ('date', models.CharField(help_text='Event date in YYYY-MM-DD format', max_length=10)),
                ('time', models.CharField(help_text='Start time in 24-hour HH:MM format', max_length=5)),
                ('mode', models.CharField(choices=[('online', 'Online'), ('offline', 'Offline'), ('hybrid', 'Hybrid')], help_text='Whether the event is online, offline or hybrid', max_length=10)),
                ('audience', models.CharField(help_text='Who the event is for', max_length=200)),
                ('agenda', models.JSONField(default=list, help_text='Ordered list of agenda items')),
                ('organizer', models.CharField(help_text='Person, company or community organizing the event', max_length=200)),
                ('tags', models.JSONField(default=list, help_text='Tags used to find similar events')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'ordering': ['-created_at'],
            },
        ),
    ]

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GoalPoints',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('context', models.CharField(blank=True, default='general', max_length=100)),
                ('goal_value', models.PositiveIntegerField()),
                ('suggested_value', models.IntegerField(default=0)),
                ('points_at_start', models.IntegerField(default=0)),
                ('points_at_end', models.IntegerField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('achieved', models.BooleanField(default=False)),
                ('achieved_date', models.DateTimeField(blank=True, null=True)),
                ('end_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'goal_points',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['user', 'context', 'is_active'], name='goal_user_ctx_active_idx')],
            },
        ),
    ]

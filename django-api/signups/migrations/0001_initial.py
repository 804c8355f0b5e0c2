from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SignupSheet",
            fields=[
                (
                    "session_id",
                    models.CharField(max_length=255, primary_key=True, serialize=False),
                ),
                ("capacity", models.PositiveIntegerField()),
                ("closed", models.BooleanField(default=False)),
                ("signups", models.JSONField(default=list)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["session_id"],
            },
        ),
    ]

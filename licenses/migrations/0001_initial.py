from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "client_id",
                    models.CharField(max_length=255, primary_key=True, serialize=False),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDIENTE", "Pending approval"),
                            ("ACTIVA", "Active"),
                            ("BLOQUEADA", "Blocked"),
                            ("EXPIRADA", "Expired"),
                        ],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("expiration_date", models.DateTimeField(blank=True, null=True)),
                (
                    "created_at",
                    models.DateTimeField(blank=True, editable=False, null=True),
                ),
                (
                    "last_seen",
                    models.DateTimeField(blank=True, editable=False, null=True),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["client_id"],
                "indexes": [
                    models.Index(
                        fields=["status", "expiration_date"],
                        name="licenses_status_a1e7c4_idx",
                    )
                ],
            },
        ),
    ]

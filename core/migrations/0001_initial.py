import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("wallet", models.CharField(max_length=42, primary_key=True, serialize=False)),
                ("coin", models.PositiveBigIntegerField(default=0)),
                ("high_score", models.PositiveBigIntegerField(default=0)),
                ("last_login", models.DateTimeField(blank=True, null=True)),
                ("last_update", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "kind",
                    models.CharField(
                        choices=[("login_grant", "Login grant"), ("save", "Save"), ("withdraw", "Withdraw")],
                        max_length=16,
                    ),
                ),
                ("delta", models.BigIntegerField()),
                ("balance_after", models.PositiveBigIntegerField()),
                ("nonce", models.BigIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="core.account",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["account", "created_at"], name="ledger_account_created_idx")],
            },
        ),
    ]

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Alert",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("city", models.CharField(max_length=100, verbose_name="City")),
                ("area", models.CharField(max_length=150, verbose_name="Area")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("weather", "Weather"),
                            ("fire_disaster", "Fire / Disaster"),
                            ("emergency_safety", "Emergency Safety"),
                            ("traffic_transport", "Traffic / Transport"),
                            ("natural_disaster", "Natural Disaster"),
                            ("public_safety_law", "Public Safety / Law"),
                            ("health_disease", "Health / Disease"),
                            ("utility_emergency", "Utility Emergency"),
                            ("community_authority", "Community / Authority"),
                        ],
                        max_length=30,
                        verbose_name="Category",
                    ),
                ),
                (
                    "alert_type",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Free-form sub-type within the category, e.g. 'flood'.",
                        max_length=100,
                        verbose_name="Alert Type",
                    ),
                ),
                (
                    "priority",
                    models.CharField(
                        choices=[("normal", "Normal"), ("urgent", "Urgent"), ("emergency", "Emergency")],
                        default="normal",
                        max_length=10,
                        verbose_name="Priority",
                    ),
                ),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("message", models.TextField(verbose_name="Message")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("expires_at", models.DateTimeField(blank=True, null=True, verbose_name="Expires At")),
                ("notified_count", models.PositiveIntegerField(default=0, verbose_name="Residents Notified")),
                (
                    "administrator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="alerts",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Administrator",
                    ),
                ),
            ],
            options={
                "verbose_name": "Alert",
                "verbose_name_plural": "Alerts",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["city", "area", "is_active"], name="alert_locality_idx")],
            },
        ),
    ]

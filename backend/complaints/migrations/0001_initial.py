import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("pending", "Pending"),
    ("assigned", "Assigned"),
    ("in_progress", "In Progress"),
    ("resolved", "Resolved"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Complaint",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("state", models.CharField(blank=True, default="", max_length=100, verbose_name="State")),
                ("district", models.CharField(blank=True, default="", max_length=100, verbose_name="District")),
                (
                    "sub_district",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Mandal / tehsil / block.",
                        max_length=100,
                        verbose_name="Sub-district",
                    ),
                ),
                ("city", models.CharField(blank=True, default="", max_length=100, verbose_name="City")),
                ("area", models.CharField(blank=True, default="", max_length=150, verbose_name="Area")),
                ("postal_code", models.CharField(blank=True, default="", max_length=12, verbose_name="Postal Code")),
                ("code", models.CharField(editable=False, max_length=32, unique=True, verbose_name="Complaint Code")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("garbage", "Garbage"),
                            ("water", "Water"),
                            ("power", "Power"),
                            ("road", "Road"),
                            ("drainage", "Drainage"),
                            ("streetlight", "Streetlight"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                        verbose_name="Category",
                    ),
                ),
                ("description", models.TextField(verbose_name="Description")),
                (
                    "priority",
                    models.CharField(
                        choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")],
                        default="medium",
                        max_length=10,
                        verbose_name="Priority",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES,
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("version", models.PositiveIntegerField(default=0, verbose_name="Version")),
                ("full_address", models.TextField(blank=True, default="", verbose_name="Full Address")),
                ("house_number", models.CharField(blank=True, default="", max_length=30, verbose_name="House Number")),
                ("street_number", models.CharField(blank=True, default="", max_length=30, verbose_name="Street Number")),
                ("landmark", models.CharField(blank=True, default="", max_length=150, verbose_name="Landmark")),
                (
                    "latitude",
                    models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True, verbose_name="Latitude"),
                ),
                (
                    "longitude",
                    models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True, verbose_name="Longitude"),
                ),
                (
                    "assigned_admin",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assigned_complaints",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Assigned Administrator",
                    ),
                ),
                (
                    "citizen",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="complaints",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Citizen",
                    ),
                ),
            ],
            options={
                "verbose_name": "Complaint",
                "verbose_name_plural": "Complaints",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["assigned_admin", "status"], name="complaint_owner_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ComplaintStatusLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "from_status",
                    models.CharField(
                        blank=True,
                        choices=STATUS_CHOICES,
                        default="",
                        max_length=20,
                        verbose_name="Previous Status",
                    ),
                ),
                ("to_status", models.CharField(choices=STATUS_CHOICES, max_length=20, verbose_name="New Status")),
                (
                    "changed_by",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="complaint_status_changes",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Changed By",
                    ),
                ),
                (
                    "complaint",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_logs",
                        to="complaints.complaint",
                        verbose_name="Complaint",
                    ),
                ),
            ],
            options={
                "verbose_name": "Complaint Status Log",
                "verbose_name_plural": "Complaint Status Logs",
                "ordering": ["created_at", "id"],
            },
        ),
        migrations.CreateModel(
            name="ComplaintNote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("text", models.TextField(verbose_name="Note")),
                (
                    "author",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="complaint_notes",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Author",
                    ),
                ),
                (
                    "complaint",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notes",
                        to="complaints.complaint",
                        verbose_name="Complaint",
                    ),
                ),
            ],
            options={
                "verbose_name": "Complaint Note",
                "verbose_name_plural": "Complaint Notes",
                "ordering": ["created_at", "id"],
            },
        ),
    ]

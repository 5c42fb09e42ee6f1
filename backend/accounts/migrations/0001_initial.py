import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        error_messages={"unique": "A user with that username already exists."},
                        help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.",
                        max_length=150,
                        unique=True,
                        validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                        verbose_name="username",
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
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
                (
                    "role",
                    models.CharField(
                        choices=[("citizen", "Citizen"), ("administrator", "Administrator")],
                        db_index=True,
                        default="citizen",
                        max_length=20,
                        verbose_name="Role",
                    ),
                ),
                ("phone_number", models.CharField(blank=True, default="", max_length=15, verbose_name="Phone Number")),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "User",
                "verbose_name_plural": "Users",
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="JurisdictionHistory",
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
                (
                    "administrator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="jurisdiction_history",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Administrator",
                    ),
                ),
            ],
            options={
                "verbose_name": "Jurisdiction History Entry",
                "verbose_name_plural": "Jurisdiction History",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("complaints", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "sender_role",
                    models.CharField(
                        choices=[("citizen", "Citizen"), ("administrator", "Administrator")],
                        max_length=20,
                        verbose_name="Sender Role",
                    ),
                ),
                ("body", models.TextField(verbose_name="Message")),
                ("is_seen", models.BooleanField(default=False, verbose_name="Seen")),
                ("seen_at", models.DateTimeField(blank=True, null=True, verbose_name="Seen At")),
                (
                    "complaint",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="complaints.complaint",
                        verbose_name="Complaint",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Sender",
                    ),
                ),
            ],
            options={
                "verbose_name": "Message",
                "verbose_name_plural": "Messages",
                "ordering": ["created_at", "id"],
                "indexes": [models.Index(fields=["complaint", "is_seen"], name="message_unseen_idx")],
            },
        ),
    ]

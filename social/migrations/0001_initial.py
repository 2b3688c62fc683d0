import django.contrib.auth.models
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import social.models.follow


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
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("username", models.CharField(max_length=30, unique=True, validators=[django.core.validators.RegexValidator(message="Username must consist of at least three alphanumericals", regex="^@?\\w{3,}$")])),
                ("external_id", models.CharField(blank=True, max_length=128, null=True, unique=True)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("bio", models.TextField(blank=True, help_text="short user bio shown on profile", max_length=500, validators=[django.core.validators.MaxLengthValidator(500)])),
                ("profile_image", models.URLField(blank=True)),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "ordering": ["-date_joined"],
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Follow",
            fields=[
                ("id", models.UUIDField(default=social.models.follow._uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("follower", models.ForeignKey(db_column="follower_id", on_delete=django.db.models.deletion.CASCADE, related_name="following_edges", to=settings.AUTH_USER_MODEL)),
                ("following", models.ForeignKey(db_column="following_id", on_delete=django.db.models.deletion.CASCADE, related_name="follower_edges", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "follows",
                "indexes": [
                    models.Index(fields=["follower", "created_at"], name="idx_follows_follower_created"),
                    models.Index(fields=["following", "created_at"], name="idx_follows_following_created"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("follower", "following"), name="uniq_follows_follower_following"),
                    models.CheckConstraint(condition=models.Q(("follower", models.F("following")), _negated=True), name="chk_follows_not_self"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Block",
            fields=[
                ("id", models.UUIDField(default=social.models.follow._uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("blocker", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="blocks_made", to=settings.AUTH_USER_MODEL)),
                ("blocked", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="blocks_received", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "blocks",
                "indexes": [
                    models.Index(fields=["blocker", "created_at"], name="idx_blocks_blocker_created"),
                    models.Index(fields=["blocked"], name="idx_blocks_blocked"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("blocker", "blocked"), name="uniq_blocks_blocker_blocked"),
                    models.CheckConstraint(condition=models.Q(("blocker", models.F("blocked")), _negated=True), name="chk_blocks_not_self"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.UUIDField(default=social.models.follow._uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("notification_type", models.CharField(choices=[("follow", "Follow"), ("reaction", "Reaction"), ("comment", "Comment"), ("reply", "Reply"), ("quote", "Quote")], max_length=20)),
                ("target_type", models.CharField(blank=True, choices=[("log", "Log"), ("thread", "Forum thread"), ("reply", "Forum reply")], max_length=20, null=True)),
                ("target_id", models.CharField(blank=True, max_length=64, null=True)),
                ("content", models.CharField(blank=True, max_length=200, null=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("recipient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
                ("sender", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="sent_notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="idx_notif_recipient_unread"),
                    models.Index(fields=["recipient", "created_at"], name="idx_notif_recipient_created"),
                    models.Index(fields=["created_at"], name="idx_notif_created"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RateWindowEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=255)),
                ("timestamp", models.DateTimeField()),
            ],
            options={
                "db_table": "rate_window_entries",
                "indexes": [
                    models.Index(fields=["key", "timestamp"], name="idx_rate_key_timestamp"),
                    models.Index(fields=["timestamp"], name="idx_rate_timestamp"),
                ],
            },
        ),
    ]

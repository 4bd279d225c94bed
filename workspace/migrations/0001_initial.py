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
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="workspace_team_owned",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Document",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("owner_type", models.CharField(blank=True, max_length=64, null=True)),
                ("owner_id", models.CharField(blank=True, max_length=64, null=True)),
                ("title", models.CharField(max_length=200)),
                ("body", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Draft",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("owner_type", models.CharField(blank=True, max_length=64, null=True)),
                ("owner_id", models.CharField(blank=True, max_length=64, null=True)),
                ("title", models.CharField(max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Asset",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("owner_type", models.CharField(blank=True, max_length=64, null=True)),
                ("owner_id", models.CharField(blank=True, max_length=64, null=True)),
                ("name", models.CharField(max_length=200)),
                (
                    "kind",
                    models.CharField(
                        choices=[("IMAGE", "Image"), ("FILE", "File"), ("LINK", "Link")],
                        default="FILE",
                        max_length=8,
                    ),
                ),
                ("url", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="document",
            index=models.Index(fields=["owner_type", "owner_id"], name="document_owner_idx"),
        ),
        migrations.AddConstraint(
            model_name="document",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    models.Q(("owner_id__isnull", True), ("owner_type__isnull", True)),
                    models.Q(("owner_id__isnull", False), ("owner_type__isnull", False)),
                    _connector="OR",
                ),
                name="workspace_document_owner_pair",
            ),
        ),
        migrations.AddConstraint(
            model_name="draft",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    models.Q(("owner_id__isnull", True), ("owner_type__isnull", True)),
                    models.Q(("owner_id__isnull", False), ("owner_type__isnull", False)),
                    _connector="OR",
                ),
                name="workspace_draft_owner_pair",
            ),
        ),
        migrations.AddIndex(
            model_name="asset",
            index=models.Index(fields=["owner_type", "owner_id"], name="asset_owner_idx"),
        ),
        migrations.AddConstraint(
            model_name="asset",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    models.Q(("owner_id__isnull", True), ("owner_type__isnull", True)),
                    models.Q(("owner_id__isnull", False), ("owner_type__isnull", False)),
                    _connector="OR",
                ),
                name="workspace_asset_owner_pair",
            ),
        ),
    ]

from django.db import models

from ownership.models import HasMorphOwner, HasOwner


class Team(HasOwner):
    """
    A group of users. Registered as the "team" owner type, and itself owned by
    the user who created it.
    """
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    default_owner_on_create = True

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Document(HasMorphOwner):
    """Only users may own documents; ownership is always set explicitly."""
    title = models.CharField(max_length=200)
    body = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    allowed_owner_types = ("user",)

    class Meta(HasMorphOwner.Meta):
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner_type", "owner_id"], name="document_owner_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Draft(HasMorphOwner):
    """Scratch text; whoever is acting when it is created becomes the owner."""
    title = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    default_owner_on_create = True

    class Meta(HasMorphOwner.Meta):
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title


class AssetKind(models.TextChoices):
    IMAGE = "IMAGE", "Image"
    FILE = "FILE", "File"
    LINK = "LINK", "Link"


class Asset(HasMorphOwner):
    """Shared resource owned by a user or a team."""
    name = models.CharField(max_length=200)
    kind = models.CharField(max_length=8, choices=AssetKind.choices, default=AssetKind.FILE)
    url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    allowed_owner_types = ("user", "team")

    class Meta(HasMorphOwner.Meta):
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner_type", "owner_id"], name="asset_owner_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_kind_display()} • {self.name}"

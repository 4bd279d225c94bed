"""Custom user model.

Role in ownership
-----------------
- Registered as the `"user"` owner type (see `OWNERSHIP_OWNER_TYPES`), so users
  can own any polymorphic owned record.
- `AUTH_USER_MODEL` points here, making it the FK target of `HasOwner` models
  and the actor bound by `CurrentActorMiddleware`.

Behavior
--------
- Authentication behaves exactly like Django's built-in user via `AbstractUser`.
"""

from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Project user; the default owner and current actor of requests."""

    def owned(self, model):
        """Rows of an owned `model` whose owner is this user."""
        return model._default_manager.where_owned_by(self)

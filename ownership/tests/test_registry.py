"""
Owner type registry tests.

What these tests verify
-----------------------
- Tags resolve to models and models (or instances) resolve back to tags.
- Unknown tags and unregistered models raise `UnregisteredOwnerType`, which is
  also a `LookupError`.
- Re-pointing a tag or a model raises `ImproperlyConfigured`; repeating an
  identical registration is a no-op.
- Loaders fetch owners by key, return None for missing rows, and can be replaced.
- The process-wide registry is populated from `OWNERSHIP_OWNER_TYPES` at start-up.

Notes
-----
- Most tests build a private `OwnerTypeRegistry` so the shared one is untouched.
"""

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ImproperlyConfigured
from django.test import TestCase
from django.utils.functional import SimpleLazyObject

from accounts.models import User
from ownership.exceptions import UnregisteredOwnerType
from ownership.registry import OwnerTypeRegistry, owner_types
from workspace.models import Document, Team


class OwnerTypeRegistryTests(TestCase):

    def setUp(self):
        self.registry = OwnerTypeRegistry()
        self.registry.register("user", "accounts.User")
        self.registry.register("team", Team)

    def test_resolve_and_tag_for(self):
        self.assertIs(self.registry.resolve("user"), User)
        self.assertIs(self.registry.resolve("team"), Team)
        self.assertEqual(self.registry.tag_for(User), "user")
        self.assertEqual(self.registry.tag_for(Team(name="Ops")), "team")
        self.assertIn("team", self.registry)
        self.assertEqual(len(self.registry), 2)
        self.assertEqual(set(self.registry.tags()), {"user", "team"})

    def test_unknown_tag_raises(self):
        with self.assertRaises(UnregisteredOwnerType) as ctx:
            self.registry.resolve("ghost")
        self.assertEqual(ctx.exception.tag, "ghost")
        # Also usable as a LookupError by generic callers.
        with self.assertRaises(LookupError):
            self.registry.load("ghost", 1)

    def test_unregistered_model_raises(self):
        with self.assertRaises(UnregisteredOwnerType) as ctx:
            self.registry.tag_for(Document(title="x"))
        self.assertEqual(ctx.exception.model_label, "workspace.Document")
        self.assertFalse(self.registry.is_registered(Document))

    def test_anonymous_user_is_never_registered(self):
        self.assertFalse(self.registry.is_registered(AnonymousUser()))
        with self.assertRaises(UnregisteredOwnerType):
            self.registry.tag_for(AnonymousUser())

    def test_conflicting_registrations_rejected(self):
        # Same pair again is fine.
        self.registry.register("user", User)
        with self.assertRaises(ImproperlyConfigured):
            self.registry.register("user", Team)
        with self.assertRaises(ImproperlyConfigured):
            self.registry.register("member", User)
        with self.assertRaises(ImproperlyConfigured):
            self.registry.register("", Document)

    def test_load_by_key(self):
        alice = User.objects.create_user(username="alice", password="pw")
        self.assertEqual(self.registry.load("user", alice.pk), alice)
        # Keys are stored as text; the loader accepts them as-is.
        self.assertEqual(self.registry.load("user", str(alice.pk)), alice)
        self.assertIsNone(self.registry.load("user", alice.pk + 1000))

    def test_custom_loader(self):
        calls = []

        def loader(key):
            calls.append(key)
            return None

        registry = OwnerTypeRegistry()
        registry.register("team", Team, loader=loader)
        self.assertIsNone(registry.load("team", "7"))
        self.assertEqual(calls, ["7"])

    def test_clear(self):
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)
        self.assertFalse(self.registry.is_registered(User))

    def test_process_registry_configured_from_settings(self):
        self.assertIs(owner_types.resolve("user"), User)
        self.assertIs(owner_types.resolve("team"), Team)

    def test_lazy_wrapped_owner_resolves_to_wrapped_model(self):
        alice = User.objects.create_user(username="alice", password="pw")
        lazy = SimpleLazyObject(lambda: alice)
        self.assertEqual(self.registry.tag_for(lazy), "user")
        self.assertTrue(self.registry.is_registered(lazy))

    def test_load_with_unparseable_key(self):
        self.assertIsNone(self.registry.load("user", "abc"))

"""
Workspace API tests: ownership on create, owner-scoped access, and the
`change-owner` / `abandon` actions.

What these tests verify
-----------------------
- **Auth required**: SessionAuthentication + IsAuthenticated returns 403 for
  unauthenticated API access.
- **Ownership on create**: the requesting user becomes the owner unless an
  allowed explicit owner is supplied; owners the caller cannot act for are
  rejected with 400.
- **Per-owner isolation**: records owned by someone else are invisible (404 on
  detail, absent from lists). Team-owned assets are visible to the team's owner.
- **Ownership ops**: transferring and abandoning records, allow-list errors as
  400 with the record unchanged.
- **Filtering / schema**: `?owner_type=` and `?unowned=` filters; the OpenAPI
  schema renders with the owner field extension.

Notes
-----
- Tests use the real APIClient with session login so the actor middleware and
  DRF view plumbing are both exercised.
"""

from rest_framework.test import APIClient, APITestCase

from accounts.models import User
from workspace.models import Asset, AssetKind, Document, Draft, Team


def user_ref(user):
    return {"type": "user", "id": user.pk}


def team_ref(team):
    return {"type": "team", "id": team.pk}


class ApiTestBase(APITestCase):

    def setUp(self):
        self.alice = User.objects.create_user(username="alice", password="pass12345")
        self.bob = User.objects.create_user(username="bob", password="pass12345")
        self.client = APIClient()
        self.client.login(username="alice", password="pass12345")

    def login_as(self, username):
        self.client.logout()
        self.client.login(username=username, password="pass12345")


class AuthAndCreateTests(ApiTestBase):
    """Authentication and owner assignment on create."""

    def test_auth_required_unauthenticated_403(self):
        self.client.logout()
        resp = self.client.get("/api/documents/")
        self.assertEqual(resp.status_code, 403)

    def test_create_document_sets_owner_to_caller(self):
        resp = self.client.post("/api/documents/", {"title": "Plan"}, format="json")
        self.assertEqual(resp.status_code, 201, resp.content)
        self.assertEqual(resp.data["owner"], user_ref(self.alice))
        self.assertTrue(Document.objects.get(pk=resp.data["id"]).is_owned_by(self.alice))

    def test_create_draft_sets_owner_to_caller(self):
        resp = self.client.post("/api/drafts/", {"title": "Scratch"}, format="json")
        self.assertEqual(resp.status_code, 201, resp.content)
        self.assertEqual(resp.data["owner"], user_ref(self.alice))

    def test_create_team_owned_by_creator(self):
        resp = self.client.post("/api/teams/", {"name": "Ops"}, format="json")
        self.assertEqual(resp.status_code, 201, resp.content)
        team = Team.objects.get(pk=resp.data["id"])
        self.assertEqual(team.owner, self.alice)
        self.assertEqual(resp.data["owner"], user_ref(self.alice))

    def test_cannot_create_for_another_user(self):
        resp = self.client.post(
            "/api/documents/", {"title": "Sneaky", "owner": user_ref(self.bob)}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("owner", resp.data)
        self.assertEqual(Document.objects.count(), 0)

    def test_document_cannot_be_created_for_a_team(self):
        team = Team.objects.create(name="Ops", owner=self.alice)
        resp = self.client.post(
            "/api/documents/", {"title": "Plan", "owner": team_ref(team)}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("owner", resp.data)
        self.assertEqual(Document.objects.count(), 0)

    def test_asset_can_be_created_for_own_team(self):
        team = Team.objects.create(name="Ops", owner=self.alice)
        resp = self.client.post(
            "/api/assets/",
            {"name": "Logo", "kind": AssetKind.IMAGE, "owner": team_ref(team)},
            format="json",
        )
        self.assertEqual(resp.status_code, 201, resp.content)
        self.assertEqual(resp.data["owner"], team_ref(team))
        self.assertTrue(Asset.objects.get(pk=resp.data["id"]).is_owned_by(team))

    def test_asset_cannot_be_created_for_someone_elses_team(self):
        team = Team.objects.create(name="Bob's", owner=self.bob)
        resp = self.client.post(
            "/api/assets/", {"name": "Logo", "owner": team_ref(team)}, format="json"
        )
        self.assertEqual(resp.status_code, 400)

    def test_owner_input_shape_is_validated(self):
        resp = self.client.post("/api/drafts/", {"title": "x", "owner": "alice"}, format="json")
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post(
            "/api/drafts/", {"title": "x", "owner": {"type": "ghost", "id": 1}}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post(
            "/api/drafts/", {"title": "x", "owner": {"type": "user", "id": 999999}}, format="json"
        )
        self.assertEqual(resp.status_code, 400)

    def test_explicit_null_owner_creates_unowned_record(self):
        resp = self.client.post("/api/drafts/", {"title": "Loose", "owner": None}, format="json")
        self.assertEqual(resp.status_code, 201, resp.content)
        self.assertIsNone(resp.data["owner"])
        self.assertFalse(Draft.objects.get(pk=resp.data["id"]).has_owner())

    def test_omitted_owner_still_defaults_to_caller(self):
        resp = self.client.post("/api/assets/", {"name": "Logo"}, format="json")
        self.assertEqual(resp.status_code, 201, resp.content)
        self.assertEqual(resp.data["owner"], user_ref(self.alice))
        self.assertEqual(self.client.get(f"/api/assets/{resp.data['id']}/").status_code, 200)

    def test_owner_is_ignored_on_update(self):
        doc = Document.objects.create(title="Plan", owner_type="user", owner_id=str(self.alice.pk))
        resp = self.client.patch(
            f"/api/documents/{doc.pk}/", {"title": "Plan v2", "owner": user_ref(self.bob)}, format="json"
        )
        self.assertEqual(resp.status_code, 200, resp.content)
        doc.refresh_from_db()
        self.assertEqual(doc.title, "Plan v2")
        self.assertTrue(doc.is_owned_by(self.alice))


class IsolationTests(ApiTestBase):
    """Owner-scoped lists and object-level access."""

    def setUp(self):
        super().setUp()
        self.mine = Document.objects.create(title="Mine", owner_type="user", owner_id=str(self.alice.pk))
        self.theirs = Document.objects.create(title="Theirs", owner_type="user", owner_id=str(self.bob.pk))
        self.loose = Document.objects.create(title="Nobody's")

    def test_list_only_shows_own_records(self):
        resp = self.client.get("/api/documents/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["count"], 1)
        self.assertEqual([row["id"] for row in resp.data["results"]], [self.mine.pk])

    def test_other_owners_records_are_404(self):
        self.assertEqual(self.client.get(f"/api/documents/{self.mine.pk}/").status_code, 200)
        self.assertEqual(self.client.get(f"/api/documents/{self.theirs.pk}/").status_code, 404)
        self.assertEqual(self.client.get(f"/api/documents/{self.loose.pk}/").status_code, 404)
        resp = self.client.delete(f"/api/documents/{self.theirs.pk}/")
        self.assertEqual(resp.status_code, 404)
        self.assertTrue(Document.objects.filter(pk=self.theirs.pk).exists())

    def test_team_assets_visible_to_team_owner_only(self):
        team = Team.objects.create(name="Ops", owner=self.alice)
        asset = Asset.objects.create(name="Logo", owner_type="team", owner_id=str(team.pk))
        resp = self.client.get("/api/assets/")
        self.assertEqual([row["id"] for row in resp.data["results"]], [asset.pk])
        self.assertEqual(self.client.get(f"/api/assets/{asset.pk}/").status_code, 200)

        self.login_as("bob")
        self.assertEqual(self.client.get("/api/assets/").data["count"], 0)
        self.assertEqual(self.client.get(f"/api/assets/{asset.pk}/").status_code, 404)


class OwnershipOpsTests(ApiTestBase):
    """`change-owner` and `abandon` actions."""

    def setUp(self):
        super().setUp()
        self.doc = Document.objects.create(title="Plan", owner_type="user", owner_id=str(self.alice.pk))
        self.team = Team.objects.create(name="Ops", owner=self.alice)

    def test_change_owner_transfers_record(self):
        resp = self.client.post(
            f"/api/documents/{self.doc.pk}/change-owner/", {"owner": user_ref(self.bob)}, format="json"
        )
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.data, {"id": self.doc.pk, "owner": user_ref(self.bob)})
        self.doc.refresh_from_db()
        self.assertTrue(self.doc.is_owned_by(self.bob))

        # Previous owner has lost access; new owner has gained it.
        self.assertEqual(self.client.get(f"/api/documents/{self.doc.pk}/").status_code, 404)
        self.login_as("bob")
        self.assertEqual(self.client.get(f"/api/documents/{self.doc.pk}/").status_code, 200)

    def test_change_owner_to_not_allowed_type_is_400(self):
        resp = self.client.post(
            f"/api/documents/{self.doc.pk}/change-owner/", {"owner": team_ref(self.team)}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("owner", resp.data)
        self.doc.refresh_from_db()
        self.assertTrue(self.doc.is_owned_by(self.alice))

    def test_change_owner_unknown_type_is_400(self):
        resp = self.client.post(
            f"/api/documents/{self.doc.pk}/change-owner/", {"owner": {"type": "ghost", "id": 1}}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.doc.refresh_from_db()
        self.assertTrue(self.doc.is_owned_by(self.alice))

    def test_asset_moves_between_user_and_team(self):
        asset = Asset.objects.create(name="Logo", owner_type="user", owner_id=str(self.alice.pk))
        resp = self.client.post(
            f"/api/assets/{asset.pk}/change-owner/", {"owner": team_ref(self.team)}, format="json"
        )
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.data["owner"], team_ref(self.team))
        # Still visible through the team.
        self.assertEqual(self.client.get(f"/api/assets/{asset.pk}/").status_code, 200)

    def test_cannot_change_owner_of_someone_elses_record(self):
        theirs = Document.objects.create(title="Theirs", owner_type="user", owner_id=str(self.bob.pk))
        resp = self.client.post(
            f"/api/documents/{theirs.pk}/change-owner/", {"owner": user_ref(self.alice)}, format="json"
        )
        self.assertEqual(resp.status_code, 404)
        theirs.refresh_from_db()
        self.assertTrue(theirs.is_owned_by(self.bob))

    def test_abandon_clears_owner(self):
        resp = self.client.post(f"/api/documents/{self.doc.pk}/abandon/", format="json")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.data, {"id": self.doc.pk, "owner": None})
        self.doc.refresh_from_db()
        self.assertFalse(self.doc.has_owner())
        self.assertEqual(self.client.get(f"/api/documents/{self.doc.pk}/").status_code, 404)

    def test_team_change_owner_between_users(self):
        resp = self.client.post(
            f"/api/teams/{self.team.pk}/change-owner/", {"owner": user_ref(self.bob)}, format="json"
        )
        self.assertEqual(resp.status_code, 200, resp.content)
        self.team.refresh_from_db()
        self.assertEqual(self.team.owner, self.bob)


class FilterAndSchemaTests(ApiTestBase):

    def test_owner_type_filter(self):
        team = Team.objects.create(name="Ops", owner=self.alice)
        Asset.objects.create(name="Mine", owner_type="user", owner_id=str(self.alice.pk))
        team_asset = Asset.objects.create(name="Ours", owner_type="team", owner_id=str(team.pk))

        resp = self.client.get("/api/assets/", {"owner_type": "team"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([row["id"] for row in resp.data["results"]], [team_asset.pk])
        self.assertEqual(self.client.get("/api/assets/").data["count"], 2)
        self.assertEqual(self.client.get("/api/assets/", {"owner_type": "ghost"}).data["count"], 0)

    def test_kind_filter_combines_with_owner_scope(self):
        Asset.objects.create(name="Pic", kind=AssetKind.IMAGE, owner_type="user", owner_id=str(self.alice.pk))
        Asset.objects.create(name="Doc", kind=AssetKind.FILE, owner_type="user", owner_id=str(self.alice.pk))
        Asset.objects.create(name="Other", kind=AssetKind.IMAGE, owner_type="user", owner_id=str(self.bob.pk))
        resp = self.client.get("/api/assets/", {"kind": AssetKind.IMAGE})
        self.assertEqual([row["name"] for row in resp.data["results"]], ["Pic"])

    def test_drafts_listed_for_caller(self):
        Draft.objects.create(title="a", owner_type="user", owner_id=str(self.alice.pk))
        Draft.objects.create(title="b", owner_type="user", owner_id=str(self.bob.pk))
        resp = self.client.get("/api/drafts/")
        self.assertEqual(resp.data["count"], 1)
        self.assertEqual(resp.data["results"][0]["owner"], user_ref(self.alice))

    def test_schema_renders(self):
        resp = self.client.get("/api/schema/")
        self.assertEqual(resp.status_code, 200)

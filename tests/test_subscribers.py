"""
Tests for subscriber endpoints.
"""
from mailmaster.models import Campaign, CampaignSubscriber, Subscriber


class TestSubscribersEndpoints:
    """Test subscriber CRUD."""

    def test_create_subscriber(self, client, test_user, auth_headers):
        response = client.post(
            "/api/subscribers",
            headers=auth_headers,
            json={"email": "a@x.com", "name": "Alice"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "a@x.com"
        assert data["name"] == "Alice"
        assert data["user_id"] == test_user.id

    def test_create_rejects_bad_email(self, client, auth_headers):
        response = client.post(
            "/api/subscribers",
            headers=auth_headers,
            json={"email": "not-an-email", "name": "Alice"},
        )
        assert response.status_code == 422

    def test_create_requires_name(self, client, auth_headers):
        response = client.post("/api/subscribers", headers=auth_headers, json={"email": "a@x.com"})
        assert response.status_code == 422

    def test_email_unique_across_owners(self, client, db, auth_headers, other_headers):
        first = client.post("/api/subscribers", headers=auth_headers, json={"email": "a@x.com", "name": "A"})
        assert first.status_code == 201

        second = client.post("/api/subscribers", headers=other_headers, json={"email": "a@x.com", "name": "B"})
        assert second.status_code == 422
        assert second.json()["details"]["field"] == "email"
        assert db.query(Subscriber).count() == 1

    def test_email_uniqueness_ignores_case(self, client, auth_headers, other_headers):
        client.post("/api/subscribers", headers=auth_headers, json={"email": "a@x.com", "name": "A"})
        response = client.post("/api/subscribers", headers=other_headers, json={"email": "A@x.com", "name": "B"})
        assert response.status_code == 422

    def test_update_with_own_email(self, client, subscribers, auth_headers):
        subscriber = subscribers[0]
        response = client.put(
            f"/api/subscribers/{subscriber.id}",
            headers=auth_headers,
            json={"email": subscriber.email},
        )
        assert response.status_code == 200
        assert response.json()["name"] == subscriber.name

    def test_update_to_taken_email(self, client, subscribers, auth_headers):
        response = client.put(
            f"/api/subscribers/{subscribers[0].id}",
            headers=auth_headers,
            json={"email": subscribers[1].email},
        )
        assert response.status_code == 422

    def test_update_email_and_name(self, client, subscribers, auth_headers):
        response = client.put(
            f"/api/subscribers/{subscribers[0].id}",
            headers=auth_headers,
            json={"email": "moved@example.com", "name": "Moved"},
        )
        data = response.json()
        assert data["email"] == "moved@example.com"
        assert data["name"] == "Moved"

    def test_list_only_returns_own_subscribers(self, client, subscribers, other_headers, auth_headers):
        assert client.get("/api/subscribers", headers=other_headers).json() == []
        assert len(client.get("/api/subscribers", headers=auth_headers).json()) == 3

    def test_delete_subscriber_leaves_campaigns(self, client, db, test_user, newsletter, subscribers, auth_headers):
        campaign = Campaign(user_id=test_user.id, newsletter_id=newsletter.id, subject="S", content="C")
        campaign.subscriber_links = [CampaignSubscriber(subscriber_id=s.id) for s in subscribers]
        db.add(campaign)
        db.commit()

        response = client.delete(f"/api/subscribers/{subscribers[0].id}", headers=auth_headers)
        assert response.status_code == 204

        data = client.get(f"/api/campaigns/{campaign.id}", headers=auth_headers).json()
        assert [s["id"] for s in data["subscribers"]] == [subscribers[1].id, subscribers[2].id]
        assert db.query(CampaignSubscriber).count() == 2


class TestSubscriberOwnership:
    """Another user's subscriber looks exactly like a missing one."""

    def test_foreign_get(self, client, subscribers, other_headers):
        assert client.get(f"/api/subscribers/{subscribers[0].id}", headers=other_headers).status_code == 404

    def test_foreign_update(self, client, subscribers, other_headers):
        response = client.put(
            f"/api/subscribers/{subscribers[0].id}",
            headers=other_headers,
            json={"email": "stolen@example.com"},
        )
        assert response.status_code == 404

    def test_foreign_delete(self, client, db, subscribers, other_headers):
        assert client.delete(f"/api/subscribers/{subscribers[0].id}", headers=other_headers).status_code == 404
        assert db.query(Subscriber).count() == 3

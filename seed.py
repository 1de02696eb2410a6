"""
Load a demo account with a newsletter, a few subscribers and a campaign.

Usage:
    python seed.py
"""
from mailmaster.database import SessionLocal, engine, Base
from mailmaster.repositories import campaigns, newsletters, subscribers, users
from mailmaster.schemas import CampaignCreate, NewsletterCreate, SubscriberCreate, UserCreate

DEMO_EMAIL = "demo@example.com"

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear the previous demo account; its rows cascade with it
existing = users.find_by_email(db, DEMO_EMAIL)
if existing:
    db.delete(existing)
    db.commit()

user, token = users.register(db, UserCreate(
    name="Demo User",
    email=DEMO_EMAIL,
    password="demo-password",
    password_confirmation="demo-password",
))

newsletter = newsletters.create_newsletter(db, user.id, NewsletterCreate(
    title="Tech Updates",
    content="Latest updates in the tech world.",
))

subscriber_ids = []
for name, email in [
    ("Ada Lovelace", "ada@example.com"),
    ("Grace Hopper", "grace@example.com"),
    ("Alan Turing", "alan@example.com"),
]:
    subscriber = subscribers.create_subscriber(db, user.id, SubscriberCreate(email=email, name=name))
    subscriber_ids.append(subscriber.id)

campaign = campaigns.create_campaign(db, user.id, CampaignCreate(
    subject="Welcome Series",
    content="Welcome to our community!",
    newsletter_id=newsletter.id,
    subscriber_ids=subscriber_ids,
))
campaigns.mark_opened(db, user.id, campaign.id, subscriber_ids[0])

db.close()

print(f"Seeded demo account {DEMO_EMAIL} (campaign #{campaign.id}, {len(subscriber_ids)} subscribers)")
print(f"Bearer token: {token}")

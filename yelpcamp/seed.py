"""
Seed the database with sample users, campgrounds and comments.

Usage:
    python -m yelpcamp.seed
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from sqlalchemy.orm import Session

from .auth import get_password_hash
from .config import get_settings
from .database import Database
from .logging_config import get_logger
from .models import Campground, Comment, User

logger = get_logger("seed")

TEST_USERS = [
    {"id": "user-john-camper", "username": "john_camper", "email": "john@example.com", "password": "password123", "name": "John Camper"},
    {"id": "user-jane-hiker", "username": "jane_hiker", "email": "jane@example.com", "password": "password123", "name": "Jane Hiker"},
    {"id": "user-demo", "username": "demo", "email": "demo@example.com", "password": "demo123", "name": "Demo User"},
]

CAMPGROUNDS = [
    {
        "name": "Cloud's Rest",
        "price": "9.00",
        "image": "https://images.unsplash.com/photo-1504280390367-361c6d9f38f4?w=800",
        "location": "Yosemite National Park, California",
        "description": "High granite camp with panoramic views. Wake up above the clouds and watch the sunrise over the valley.",
    },
    {
        "name": "Desert Mesa",
        "price": "12.00",
        "image": "https://images.unsplash.com/photo-1533873984035-25970ab07461?w=800",
        "location": "Moab, Utah",
        "description": "Red rock sites on a flat mesa top. Dark skies, slickrock trails and very little shade.",
    },
    {
        "name": "Canyon Floor",
        "price": "15.00",
        "image": "https://images.unsplash.com/photo-1464822759023-fed622ff2c3b?w=800",
        "location": "Grand Canyon, Arizona",
        "description": "Hike-in camp beside the creek at the bottom of the canyon. Permits required year round.",
    },
    {
        "name": "Whispering Pines",
        "price": "18.00",
        "image": "https://images.unsplash.com/photo-1510312305653-8ed496efae75?w=800",
        "location": "Lake Tahoe, California",
        "description": "Shaded forest loops a short walk from the lake. Bear boxes at every site.",
    },
    {
        "name": "Coastal Bluffs",
        "price": "22.00",
        "image": "https://images.unsplash.com/photo-1523987355523-c7b5b0dd90a7?w=800",
        "location": "Big Sur, California",
        "description": "Ocean-view pads perched on the bluffs. Expect fog in the morning and wind in the afternoon.",
    },
    {
        "name": "Mountain Meadow",
        "price": "14.00",
        "image": "https://images.unsplash.com/photo-1478131143081-80f7f84ca84d?w=800",
        "location": "Rocky Mountain National Park, Colorado",
        "description": "Open meadow at nine thousand feet. Elk wander through at dusk.",
    },
    {
        "name": "Redwood Haven",
        "price": "25.00",
        "image": "https://images.unsplash.com/photo-1542202229-7d93c33f5d07?w=800",
        "location": "Redwood National Park, California",
        "description": "Sites tucked between old growth redwoods. Quiet hours are strictly enforced.",
    },
    {
        "name": "Lakeside Retreat",
        "price": "20.00",
        "image": "https://images.unsplash.com/photo-1537905569824-f89f14cceb68?w=800",
        "location": "Glacier National Park, Montana",
        "description": "Waterfront camp with a boat launch and cold, clear swimming.",
    },
]

SAMPLE_COMMENTS = [
    "This place is amazing! The views are absolutely breathtaking.",
    "Great campground, but bring warm clothes - it gets cold at night!",
    "Perfect weekend getaway. Will definitely come back.",
    "The hiking trails nearby are fantastic. Saw lots of wildlife.",
    "Beautiful location but the facilities could use some updates.",
    "Best stargazing I have ever experienced. Bring a telescope!",
    "Peaceful and quiet. Exactly what I needed to recharge.",
    "Watch out for bears! Store your food properly.",
    "Bring bug spray - the mosquitoes can be relentless!",
]


def clear_database(db: Session) -> None:
    # Comments first: they reference campgrounds
    db.query(Comment).delete()
    db.query(Campground).delete()
    db.query(User).delete()
    db.commit()


def seed_database(db: Session, rng: Optional[random.Random] = None) -> Dict[str, int]:
    """Replace all rows with the sample data set and return row counts."""
    rng = rng or random.Random()
    clear_database(db)

    users = [
        User(
            id=u["id"],
            username=u["username"],
            email=u["email"],
            name=u["name"],
            hashed_password=get_password_hash(u["password"]),
        )
        for u in TEST_USERS
    ]
    db.add_all(users)
    db.flush()

    now = datetime.now(timezone.utc)
    campgrounds = []
    for i, camp in enumerate(CAMPGROUNDS):
        # Spread authorship and keep list order stable (newest first = last defined)
        created = now - timedelta(hours=len(CAMPGROUNDS) - i)
        campgrounds.append(Campground(
            author_id=users[i % len(users)].id,
            created_at=created,
            updated_at=created,
            **camp,
        ))
    db.add_all(campgrounds)
    db.flush()

    comments = []
    for campground in campgrounds:
        for _ in range(rng.randint(2, 4)):
            created = now - timedelta(seconds=rng.randint(0, 7 * 24 * 60 * 60))
            comments.append(Comment(
                text=rng.choice(SAMPLE_COMMENTS),
                campground_id=campground.id,
                author_id=rng.choice(users).id,
                created_at=created,
                updated_at=created,
            ))
    db.add_all(comments)
    db.commit()

    return {"users": len(users), "campgrounds": len(campgrounds), "comments": len(comments)}


def main() -> None:
    settings = get_settings()
    database = Database(settings.database_url)
    database.create_all()

    db = database.session()
    try:
        counts = seed_database(db)
    finally:
        db.close()
        database.dispose()

    logger.info("Database seeded successfully!", **counts)
    for user in TEST_USERS:
        logger.info("Test credentials", username=user["username"], password=user["password"])


if __name__ == "__main__":
    main()

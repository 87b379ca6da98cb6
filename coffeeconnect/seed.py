"""
Initial venue list, inserted on first startup when the locations table is empty.
"""

import logging

from sqlalchemy.orm import Session

from .models import Location

logger = logging.getLogger(__name__)

# Northgate/Interquest area, rooftop-verified coordinates
INITIAL_LOCATIONS = [
    ("Loyal Coffee - Northgate", "11550 Ridgeline Dr #102, Colorado Springs, CO 80921", 39.012600, -104.796500, 8),
    ("Red Leaf Organic Coffee - Interquest", "1254 Interquest Pkwy, Colorado Springs, CO 80921", 39.002100, -104.794800, 8),
    ("Coffee & Tea Zone - Northgate Voyager", "12225 Voyager Pkwy #3, Colorado Springs, CO 80921", 39.017300, -104.798500, 8),
    ("Tropical Latin Coffee", "1710 Briargate Blvd Ste 455, Colorado Springs, CO 80920", 38.938000, -104.795300, 12),
    ("Tempo Espresso & Coffee", "7601 N Union Blvd, Colorado Springs, CO 80920", 38.943700, -104.778300, 14),
    ("Bad Ass Coffee of Hawaii", "13491 Bass Pro Dr, Colorado Springs, CO 80921", 39.027134, -104.824254, 7),
    ("Ziggi's Coffee", "460 Chapel Hills Dr Suite 100, Colorado Springs, CO 80920", 38.948300, -104.798200, 12),
    ("Mission Coffee Roasters", "11641 Ridgeline Dr Ste 170, Colorado Springs, CO 80921", 39.014200, -104.796600, 9),
    ("Crowfoot Valley Coffee", "8836 N Union Blvd, Colorado Springs, CO 80920", 38.961200, -104.778400, 12),
    ("It's A Grind Coffee House", "9475 Briar Village Pt, Colorado Springs, CO 80920", 38.968800, -104.789800, 10),
    ("SCHEELS Café", "1226 Interquest Pkwy, Colorado Springs, CO 80921", 38.994181, -104.806517, 7),
    ("Black Rock Coffee Bar", "13590 Roller Coaster Rd Ste 170, Colorado Springs, CO 80921", 39.028931, -104.782496, 8),
    ("New Day Cafe - Northgate Plaza", "13375 Voyager Pkwy #110, Colorado Springs, CO 80921", 39.027300, -104.798800, 6),
    ("Kneaders Bakery & Cafe", "13482 Bass Pro Dr, Colorado Springs, CO 80921", 39.026300, -104.823800, 7),
    ("Bella's Bagels", "3582 Blue Horizon View Ste 148, Colorado Springs, CO 80924", 38.98422447493753, -104.75980975110684, 16),
    ("Serranos Coffee Company", "625 CO-105, Monument, CO 80132", 39.092506, -104.868505, 10),
]


def seed_locations(db: Session) -> int:
    """Insert the initial approved venues if there are no locations yet"""
    if db.query(Location).first():
        return 0

    db.add_all(
        [
            Location(
                name=name,
                address=address,
                latitude=lat,
                longitude=lon,
                approx_drive_minutes=drive,
                is_approved=True,
                is_static=True,
            )
            for name, address, lat, lon, drive in INITIAL_LOCATIONS
        ]
    )
    db.commit()
    logger.info(f"📍 Seeded {len(INITIAL_LOCATIONS)} locations")
    return len(INITIAL_LOCATIONS)

import uuid
import logging
from sqlmodel import select, Session
from models.regions import Region

logger = logging.getLogger(__name__)


def list_regions(db: Session) -> list[Region]:
    """List all regions ordered by name."""
    return db.exec(select(Region).order_by(Region.name)).all()


def get_region_by_id(
    db: Session,
    region_id: uuid.UUID
) -> Region | None:
    """Get a region by its ID."""
    return db.get(Region, region_id)


def create_region(db: Session, name: str) -> Region:
    """Create a new region. Names are not checked for uniqueness."""
    region = Region(name=name)
    db.add(region)
    db.commit()
    db.refresh(region)
    logger.info(f"Created region {region.name!r} ({region.id})")
    return region

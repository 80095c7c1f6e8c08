from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from canasta.db.session import get_db
from canasta.models.location import Location
from canasta.schemas.location import Location as LocationSchema

router = APIRouter()

@router.get("/", response_model=List[LocationSchema])
async def read_locations(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Location)
        .where(Location.is_active == True)
        .order_by(Location.department, Location.city)
    )
    return result.scalars().all()

@router.get("/{location_id}", response_model=LocationSchema)
async def read_location(location_id: int, db: AsyncSession = Depends(get_db)):
    db_location = await db.get(Location, location_id)
    if db_location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return db_location

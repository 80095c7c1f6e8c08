from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from canasta.db.session import get_db
from canasta.models.producer import Producer
from canasta.schemas.producer import Producer as ProducerSchema, ProducerListResponse

router = APIRouter()

@router.get("/", response_model=ProducerListResponse)
async def read_producers(
    page: int = Query(1, ge=1, description="Page number starting from 1"),
    limit: int = Query(10, ge=1, le=100, description="Items per page (1-100)"),
    location: Optional[int] = Query(None, description="Location id"),
    db: AsyncSession = Depends(get_db)
):
    conditions = [Producer.is_active == True]
    if location is not None:
        conditions.append(Producer.location_id == location)

    total = (await db.execute(
        select(func.count(Producer.id)).where(*conditions)
    )).scalar_one()
    result = await db.execute(
        select(Producer)
        .where(*conditions)
        .order_by(Producer.name)
        .offset((page - 1) * limit)
        .limit(limit)
    )

    return {
        "producers": result.scalars().all(),
        "pagination": {
            "current_page": page,
            "total_pages": (total + limit - 1) // limit,
            "total_producers": total,
        },
    }

@router.get("/{producer_id}", response_model=ProducerSchema)
async def read_producer(producer_id: int, db: AsyncSession = Depends(get_db)):
    db_producer = await db.get(Producer, producer_id)
    if db_producer is None:
        raise HTTPException(status_code=404, detail="Producer not found")
    return db_producer

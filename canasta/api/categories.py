from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from canasta.db.session import get_db
from canasta.models.category import Category
from canasta.schemas.category import Category as CategorySchema

router = APIRouter()

@router.get("/", response_model=List[CategorySchema])
async def read_categories(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Category).where(Category.is_active == True).order_by(Category.name)
    )
    return result.scalars().all()

@router.get("/{category_id}", response_model=CategorySchema)
async def read_category(category_id: int, db: AsyncSession = Depends(get_db)):
    db_category = await db.get(Category, category_id)
    if db_category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return db_category

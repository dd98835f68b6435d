# blog_api/db/repositories/base.py
from typing import Generic, Type, TypeVar, Optional
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, session: AsyncSession, id: str) -> Optional[ModelType]:
        """Retrieve an instance by primary key."""
        return await session.get(self.model, id)

    async def create(self, session: AsyncSession, *, obj_in: ModelType) -> ModelType:
        session.add(obj_in)
        await session.commit()
        await session.refresh(obj_in)
        return obj_in

    async def update(self, session: AsyncSession, *, db_obj: ModelType, values: dict) -> ModelType:
        for field, value in values.items():
            setattr(db_obj, field, value)
        session.add(db_obj)
        await session.commit()
        await session.refresh(db_obj)
        return db_obj

# app/core/crud_base.py

"""
공통 영속성 게이트웨이(find-all, find-by-id, exists, save, delete)를 위한 기본 클래스 모듈입니다.

저장 계층의 무결성 위반(IntegrityError)은 이 계층에서 롤백한 뒤 그대로 다시 발생시키며,
이를 도메인 오류(InvalidArgumentError)로 변환하는 것은 서비스 계층의 책임입니다.
"""

from typing import Generic, List, Optional, Type, TypeVar, Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    테이블 하나에 대한 게이트웨이입니다. 도메인별 crud 모듈에서 상속하여 모듈 수준 인스턴스로 노출합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        return await db.get(self.model, id)

    async def get_multi(self, db: AsyncSession) -> List[ModelType]:
        """모든 레코드를 id 오름차순으로 조회합니다."""
        result = await db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalars().first()

    async def exists(self, db: AsyncSession, id: Any) -> bool:
        statement = select(func.count()).select_from(self.model).where(self.model.id == id)
        result = await db.execute(statement)
        return result.scalar_one() > 0

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """
        신규 또는 변경된 ORM 객체를 저장(commit)하고 갱신된 객체를 반환합니다.
        무결성 위반 시 세션을 롤백하고 IntegrityError를 다시 발생시킵니다.
        """
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 레코드를 삭제합니다. 레코드가 없으면 None을 반환합니다.
        외래 키 위반은 save()와 같이 롤백 후 다시 발생시킵니다.
        """
        db_obj = await db.get(self.model, id)
        if db_obj is None:
            return None
        await db.delete(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        return db_obj

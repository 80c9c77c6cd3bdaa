from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import  AsyncSession
from milkrun.db.connection import async_session

async def get_session() -> AsyncGenerator[AsyncSession,None]:
    async with async_session() as session:  # session opens on first execute and closes at the end of the with block
        yield session

from typing import Optional
from sqlalchemy import delete, select
from milkrun.schema.full_schema import OTPRequest


async def latest_unverified_otp(session, phone: str) -> Optional[OTPRequest]:
    stmt = (
        select(OTPRequest)
        .where(OTPRequest.phone == phone, OTPRequest.is_verified.is_(False))
        .order_by(OTPRequest.created_at.desc(), OTPRequest.id.desc())
        .limit(1)
    )
    return (await session.execute(stmt)).scalar_one_or_none()


async def delete_otps_for_phone(session, phone: str) -> int:
    res = await session.execute(delete(OTPRequest).where(OTPRequest.phone == phone))
    return res.rowcount or 0

import hmac
import secrets
from datetime import timedelta
from fastapi import HTTPException, status
from milkrun.auth.utils import hash_token
from milkrun.common.utils import as_utc, now
from milkrun.otp.constants import OTP_EXPIRY_MINUTES, OTP_LENGTH, OTP_MAX_ATTEMPTS, logger
from milkrun.otp.repository import delete_otps_for_phone, latest_unverified_otp
from milkrun.schema.full_schema import OTPRequest


def generate_otp(length: int = OTP_LENGTH) -> str:
    return str(secrets.randbelow(10 ** length)).zfill(length)

def _otp_hash(phone: str, code: str) -> str:
    return hash_token(f"{phone}:{code}")


def send_otp(phone: str, code: str):
    # delivery channel; swap for an sms gateway client
    logger.info("otp.sent", extra={"phone": phone, "channel": "log"})
    logger.debug("otp.code", extra={"phone": phone, "code": code})


async def issue_otp(session, phone: str) -> str:
    """Replace any earlier codes for the phone with a fresh one and send it."""
    phone = phone.strip()
    await delete_otps_for_phone(session, phone)

    code = generate_otp()
    session.add(OTPRequest(
        phone=phone,
        otp_hash=_otp_hash(phone, code),
        expires_at=now() + timedelta(minutes=OTP_EXPIRY_MINUTES),
    ))
    await session.commit()

    send_otp(phone, code)
    logger.info("otp.issued", extra={"phone": phone})
    return code


async def verify_otp(session, phone: str, code: str) -> OTPRequest:
    """Check a code against the live record for the phone.

    Expired or exhausted records are deleted. Every guess that reaches the
    comparison is counted first, so a wrong guess always uses up an attempt.
    A match marks the record verified and leaves it for ``cleanup_otp``.
    """
    phone = phone.strip()
    record = await latest_unverified_otp(session, phone)
    if record is None:
        logger.warning("otp.verify.failed", extra={"phone": phone, "reason": "not_found"})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="OTP not found or already used")

    if as_utc(record.expires_at) <= now():
        await session.delete(record)
        await session.commit()
        logger.warning("otp.verify.failed", extra={"phone": phone, "reason": "expired"})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="OTP expired")

    if record.attempts >= OTP_MAX_ATTEMPTS:
        await session.delete(record)
        await session.commit()
        logger.warning("otp.verify.failed", extra={"phone": phone, "reason": "attempts_exhausted"})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Too many attempts, request a new OTP")

    record.attempts += 1
    await session.commit()

    if not hmac.compare_digest(record.otp_hash, _otp_hash(phone, code.strip())):
        logger.warning("otp.verify.failed", extra={"phone": phone, "reason": "mismatch", "attempts": record.attempts})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid OTP")

    record.is_verified = True
    await session.commit()
    logger.info("otp.verify.success", extra={"phone": phone})
    return record


async def cleanup_otp(session, phone: str):
    removed = await delete_otps_for_phone(session, phone.strip())
    await session.commit()
    logger.debug("otp.cleanup", extra={"phone": phone, "removed": removed})

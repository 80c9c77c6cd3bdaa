from datetime import timedelta
import pytest
from fastapi import HTTPException
from sqlalchemy import select
from milkrun.common.utils import now
from milkrun.otp.services import cleanup_otp, generate_otp, issue_otp, verify_otp
from milkrun.schema.full_schema import OTPRequest
from helpers import next_phone


async def _records(session, phone):
    session.expire_all()
    return list((await session.execute(select(OTPRequest).where(OTPRequest.phone == phone))).scalars().all())


def _wrong(code: str) -> str:
    return "000000" if code != "000000" else "111111"


def test_generated_code_is_numeric_and_padded():
    for _ in range(50):
        code = generate_otp(6)
        assert len(code) == 6 and code.isdigit()


@pytest.mark.asyncio
async def test_issue_replaces_earlier_codes(db_session):
    phone = next_phone()
    first = await issue_otp(db_session, phone)
    second = await issue_otp(db_session, phone)

    records = await _records(db_session, phone)
    assert len(records) == 1
    assert records[0].otp_hash not in (first, second)  # stored hashed

    await verify_otp(db_session, phone, second)


@pytest.mark.asyncio
async def test_match_marks_verified_without_deleting(db_session):
    phone = next_phone()
    code = await issue_otp(db_session, phone)

    record = await verify_otp(db_session, phone, code)
    assert record.is_verified is True
    assert record.attempts == 1
    assert len(await _records(db_session, phone)) == 1

    # a verified record is not reusable
    with pytest.raises(HTTPException) as exc:
        await verify_otp(db_session, phone, code)
    assert exc.value.status_code == 400

    await cleanup_otp(db_session, phone)
    assert await _records(db_session, phone) == []


@pytest.mark.asyncio
async def test_wrong_guesses_count_and_sixth_deletes(db_session):
    phone = next_phone()
    code = await issue_otp(db_session, phone)

    for attempt in range(1, 6):
        with pytest.raises(HTTPException) as exc:
            await verify_otp(db_session, phone, _wrong(code))
        assert exc.value.status_code == 400
        assert (await _records(db_session, phone))[0].attempts == attempt

    with pytest.raises(HTTPException) as exc:
        await verify_otp(db_session, phone, _wrong(code))
    assert exc.value.status_code == 400
    assert await _records(db_session, phone) == []

    # even the right code fails now
    with pytest.raises(HTTPException) as exc:
        await verify_otp(db_session, phone, code)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_expired_code_fails_and_is_deleted(db_session):
    phone = next_phone()
    code = await issue_otp(db_session, phone)

    record = (await _records(db_session, phone))[0]
    record.expires_at = now() - timedelta(seconds=1)
    await db_session.commit()

    with pytest.raises(HTTPException) as exc:
        await verify_otp(db_session, phone, code)
    assert exc.value.status_code == 400
    assert exc.value.detail == "OTP expired"
    assert await _records(db_session, phone) == []


@pytest.mark.asyncio
async def test_expiry_is_ten_minutes(db_session):
    phone = next_phone()
    await issue_otp(db_session, phone)
    record = (await _records(db_session, phone))[0]

    expires = record.expires_at.replace(tzinfo=None)
    created = record.created_at.replace(tzinfo=None)
    assert timedelta(minutes=9, seconds=55) <= expires - created <= timedelta(minutes=10, seconds=5)


@pytest.mark.asyncio
async def test_unknown_phone_is_bad_request(db_session):
    with pytest.raises(HTTPException) as exc:
        await verify_otp(db_session, next_phone(), "123456")
    assert exc.value.status_code == 400

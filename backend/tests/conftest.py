from typing import Any, Dict, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pharmref.database import init_db
from pharmref.schemas import AlertRule, Drug
from pharmref.services.store import ReferenceStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def drug_factory():
    def build(
        drug_id: str,
        hepatic_grade: str = "C",
        hepatic_pattern: str = "hepatocellular",
        cirrhosis_dosing: Optional[Dict[str, str]] = None,
        nephrotoxicity: Optional[Dict[str, Any]] = None,
        renal_dosing: Optional[Dict[str, str]] = None,
        **fields: Any,
    ) -> Drug:
        data: Dict[str, Any] = {
            "id": drug_id,
            "name_en": drug_id.replace("_", " ").title(),
            "hepatotoxicity": {"grade": hepatic_grade, "pattern": hepatic_pattern},
            **fields,
        }
        if cirrhosis_dosing is not None:
            data["cirrhosis_dosing"] = cirrhosis_dosing
        if nephrotoxicity is not None:
            data["nephrotoxicity"] = nephrotoxicity
        if renal_dosing is not None:
            data["renal_dosing"] = renal_dosing
        return Drug.model_validate(data)

    return build


@pytest.fixture
def rule_factory():
    def build(rule_id: str, alert_level: str = "info2", **fields: Any) -> AlertRule:
        return AlertRule.model_validate({
            "id": rule_id,
            "alert_level": alert_level,
            "title": rule_id,
            "message": f"{rule_id} message",
            **fields,
        })

    return build


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def store(session_factory):
    async with session_factory() as session:
        yield ReferenceStore(session)

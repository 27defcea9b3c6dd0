"""
Reference Store.

Local persistence for the drug and alert rule catalogs plus flat settings.
The analysis core never touches the store; callers load snapshots from here
and pass them in.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pharmref.config import get_settings
from pharmref.exceptions import (
    AlertRuleNotFoundError,
    DatasetLoadError,
    DrugNotFoundError,
    DuplicateRecordError,
    ValidationError,
)
from pharmref.models import AlertRuleRecord, DrugRecord, Setting
from pharmref.schemas import AlertRule, DataBundle, Drug
from pharmref.services.dataset import load_dataset
from pharmref.services.search import filter_drugs, sort_by_relevance

logger = logging.getLogger(__name__)


class ReferenceStore:
    """
    CRUD, seeding and bulk import/export over the reference tables.

    Drugs are listed in id order, alert rules in catalog order.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== Counts & Seeding ====================

    async def count_drugs(self) -> int:
        result = await self.db.execute(select(func.count(DrugRecord.id)))
        return result.scalar() or 0

    async def count_alerts(self) -> int:
        result = await self.db.execute(select(func.count(AlertRuleRecord.id)))
        return result.scalar() or 0

    async def seed_database(
        self,
        drugs: Optional[Sequence[Drug]] = None,
        rules: Optional[Sequence[AlertRule]] = None,
    ) -> Dict[str, int]:
        """
        Seed empty collections. Collections that already hold records are
        left untouched.

        Defaults to the bundled dataset when no records are given.

        Returns:
            Number of records added per collection
        """
        if drugs is None or rules is None:
            bundle = load_dataset()
            drugs = bundle.drugs if drugs is None else drugs
            rules = bundle.alerts if rules is None else rules

        added = {"drugs": 0, "alerts": 0}

        if await self.count_drugs() == 0:
            logger.info("Seeding drugs...")
            self.db.add_all(DrugRecord.from_schema(d) for d in drugs)
            added["drugs"] = len(drugs)

        if await self.count_alerts() == 0:
            logger.info("Seeding alert rules...")
            self.db.add_all(
                AlertRuleRecord.from_schema(r, position=i) for i, r in enumerate(rules)
            )
            added["alerts"] = len(rules)

        await self.db.commit()
        if added["drugs"] or added["alerts"]:
            logger.info(f"Seeded {added['drugs']} drugs and {added['alerts']} alert rules")
        return added

    async def reset_database(
        self,
        drugs: Optional[Sequence[Drug]] = None,
        rules: Optional[Sequence[AlertRule]] = None,
    ) -> Dict[str, int]:
        """Clear drugs and alert rules, then reseed. Settings are kept."""
        await self.db.execute(delete(DrugRecord))
        await self.db.execute(delete(AlertRuleRecord))
        await self.db.commit()
        logger.info("Cleared drug and alert rule tables")
        return await self.seed_database(drugs, rules)

    # ==================== Drugs ====================

    async def _get_drug_record(self, drug_id: str) -> Optional[DrugRecord]:
        result = await self.db.execute(select(DrugRecord).where(DrugRecord.id == drug_id))
        return result.scalar_one_or_none()

    async def get_drug(self, drug_id: str) -> Optional[Drug]:
        record = await self._get_drug_record(drug_id)
        return record.to_schema() if record else None

    async def get_all_drugs(self) -> List[Drug]:
        result = await self.db.execute(select(DrugRecord).order_by(DrugRecord.id))
        return [r.to_schema() for r in result.scalars().all()]

    async def add_drug(self, drug: Drug) -> str:
        if await self._get_drug_record(drug.id):
            raise DuplicateRecordError("drug", drug.id)

        self.db.add(DrugRecord.from_schema(drug))
        await self.db.commit()
        logger.info(f"Added drug: {drug.id}")
        return drug.id

    async def update_drug(self, drug_id: str, changes: Dict[str, Any]) -> Drug:
        """Apply a partial update. The id itself cannot change."""
        record = await self._get_drug_record(drug_id)
        if not record:
            raise DrugNotFoundError(drug_id)

        merged = {**record.document, **changes, "id": drug_id}
        try:
            drug = Drug.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid drug update for '{drug_id}': {e.error_count()} errors") from e

        record.apply(drug)
        record.updated_at = datetime.utcnow()
        await self.db.commit()
        logger.info(f"Updated drug: {drug_id} ({', '.join(sorted(changes))})")
        return drug

    async def delete_drug(self, drug_id: str) -> bool:
        record = await self._get_drug_record(drug_id)
        if not record:
            return False

        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"Deleted drug: {drug_id}")
        return True

    async def search_drugs(self, query: str, limit: Optional[int] = None) -> List[Drug]:
        """Search stored drugs; an empty query lists everything."""
        drugs = await self.get_all_drugs()
        if not query.strip():
            return drugs
        limit = limit or get_settings().SEARCH_RESULT_LIMIT
        return sort_by_relevance(filter_drugs(drugs, query), query)[:limit]

    # ==================== Alert Rules ====================

    async def _get_alert_record(self, rule_id: str) -> Optional[AlertRuleRecord]:
        result = await self.db.execute(
            select(AlertRuleRecord).where(AlertRuleRecord.id == rule_id)
        )
        return result.scalar_one_or_none()

    async def get_alert(self, rule_id: str) -> Optional[AlertRule]:
        record = await self._get_alert_record(rule_id)
        return record.to_schema() if record else None

    async def get_all_alerts(self) -> List[AlertRule]:
        result = await self.db.execute(
            select(AlertRuleRecord).order_by(AlertRuleRecord.position, AlertRuleRecord.id)
        )
        return [r.to_schema() for r in result.scalars().all()]

    async def add_alert(self, rule: AlertRule) -> str:
        """Append a rule at the end of the catalog."""
        if await self._get_alert_record(rule.id):
            raise DuplicateRecordError("alert", rule.id)

        result = await self.db.execute(select(func.max(AlertRuleRecord.position)))
        last = result.scalar()
        position = 0 if last is None else last + 1

        self.db.add(AlertRuleRecord.from_schema(rule, position=position))
        await self.db.commit()
        logger.info(f"Added alert rule: {rule.id}")
        return rule.id

    async def update_alert(self, rule_id: str, changes: Dict[str, Any]) -> AlertRule:
        record = await self._get_alert_record(rule_id)
        if not record:
            raise AlertRuleNotFoundError(rule_id)

        merged = {**record.document, **changes, "id": rule_id}
        try:
            rule = AlertRule.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid alert rule update for '{rule_id}': {e.error_count()} errors") from e

        record.apply(rule)
        record.updated_at = datetime.utcnow()
        await self.db.commit()
        logger.info(f"Updated alert rule: {rule_id}")
        return rule

    async def delete_alert(self, rule_id: str) -> bool:
        record = await self._get_alert_record(rule_id)
        if not record:
            return False

        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"Deleted alert rule: {rule_id}")
        return True

    # ==================== Settings ====================

    async def get_setting(self, key: str) -> Optional[str]:
        setting = await self.db.get(Setting, key)
        return setting.value if setting else None

    async def set_setting(self, key: str, value: str) -> None:
        setting = await self.db.get(Setting, key)
        if setting:
            setting.value = value
        else:
            self.db.add(Setting(key=key, value=value))
        await self.db.commit()

    # ==================== Export / Import ====================

    async def export_data(self) -> DataBundle:
        return DataBundle(
            drugs=await self.get_all_drugs(),
            alerts=await self.get_all_alerts(),
        )

    async def import_data(self, bundle: DataBundle) -> Dict[str, int]:
        """
        Replace stored collections with the bundle's contents.

        An empty collection in the bundle leaves the stored one as it is.
        """
        imported = {"drugs": 0, "alerts": 0}

        if bundle.drugs:
            await self.db.execute(delete(DrugRecord))
            self.db.add_all(DrugRecord.from_schema(d) for d in bundle.drugs)
            imported["drugs"] = len(bundle.drugs)

        if bundle.alerts:
            await self.db.execute(delete(AlertRuleRecord))
            self.db.add_all(
                AlertRuleRecord.from_schema(r, position=i) for i, r in enumerate(bundle.alerts)
            )
            imported["alerts"] = len(bundle.alerts)

        await self.db.commit()
        logger.info(f"Imported {imported['drugs']} drugs and {imported['alerts']} alert rules")
        return imported


def create_reference_store(db: AsyncSession) -> ReferenceStore:
    """Factory function to create reference store."""
    return ReferenceStore(db)


async def initialize_store(
    session_factory: Optional[async_sessionmaker] = None,
    db_engine: Optional[AsyncEngine] = None,
) -> bool:
    """
    Create tables and seed the bundled dataset.

    Failures are logged and reported through the return value; the
    application keeps running against whatever the store already holds.
    """
    from pharmref.database import async_session, init_db

    try:
        await init_db(db_engine)
        async with (session_factory or async_session)() as session:
            await ReferenceStore(session).seed_database()
        return True
    except DatasetLoadError as e:
        logger.error(f"Bundled dataset could not be loaded: {e.detail}")
    except Exception as e:
        logger.error(f"Store initialization failed: {e}")
    return False

"""
Database models for the reference store.

Drugs and alert rules are stored as JSON documents keyed by id, with a few
columns pulled out for listing and filtering.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from datetime import datetime

from pharmref.database import Base
from pharmref.schemas import AlertRule, Drug


class DrugRecord(Base):
    """Stored drug reference document."""

    __tablename__ = "drugs"

    id = Column(String(100), primary_key=True, index=True)
    name_en = Column(String(255), index=True, nullable=False)
    name_local = Column(String(255), index=True, nullable=True)
    drug_class = Column(String(255), nullable=True)
    hepatic_grade = Column(String(2), index=True, nullable=False)
    renal_grade = Column(String(2), index=True, nullable=True)
    document = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def from_schema(cls, drug: Drug) -> "DrugRecord":
        record = cls(id=drug.id)
        record.apply(drug)
        return record

    def apply(self, drug: Drug) -> None:
        """Overwrite the stored document and index columns."""
        self.name_en = drug.name_en
        self.name_local = drug.name_local
        self.drug_class = drug.drug_class
        self.hepatic_grade = drug.hepatotoxicity.grade.value
        self.renal_grade = drug.nephrotoxicity.grade.value if drug.nephrotoxicity else None
        self.document = drug.model_dump(mode="json")

    def to_schema(self) -> Drug:
        return Drug.model_validate(self.document)

    def __repr__(self):
        return f"<DrugRecord(id='{self.id}', grade={self.hepatic_grade}/{self.renal_grade})>"


class AlertRuleRecord(Base):
    """Stored alert rule document."""

    __tablename__ = "alert_rules"

    id = Column(String(100), primary_key=True, index=True)
    alert_level = Column(String(20), index=True, nullable=False)
    alert_category = Column(String(20), index=True, nullable=False)
    # Catalog order; breaks ties between equal-level alerts
    position = Column(Integer, index=True, nullable=False, default=0)
    document = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def from_schema(cls, rule: AlertRule, position: int = 0) -> "AlertRuleRecord":
        record = cls(id=rule.id, position=position)
        record.apply(rule)
        return record

    def apply(self, rule: AlertRule) -> None:
        self.alert_level = rule.alert_level.value
        self.alert_category = rule.alert_category.value
        self.document = rule.model_dump(mode="json")

    def to_schema(self) -> AlertRule:
        return AlertRule.model_validate(self.document)

    def __repr__(self):
        return f"<AlertRuleRecord(id='{self.id}', level={self.alert_level})>"


class Setting(Base):
    """Flat key-value setting."""

    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Setting(key='{self.key}')>"

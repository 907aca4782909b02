from sqlalchemy import Column, BigInteger, Integer, Text, TIMESTAMP, Enum as SAEnum, CheckConstraint, inspect
from sqlalchemy.orm import validates
from sqlalchemy.sql import func
from app.models.base import Base, IdType, enum_values
from app.models.enums import SubmissionStatus


class Submission(Base):
    __tablename__ = "submission_tbl"

    submission_id = Column(IdType, primary_key=True, index=True)
    reference_code = Column(Text, nullable=False, unique=True, index=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    phone_number = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    referred_by = Column(Text)
    receipt_data = Column(Text)
    receipt_url = Column(Text)
    receipt_original_name = Column(Text, nullable=False)
    receipt_mime_type = Column(Text, nullable=False)
    receipt_size_bytes = Column(BigInteger, nullable=False)
    amount = Column(Integer, nullable=False)
    status = Column(
        SAEnum(SubmissionStatus, name="submission_status_enum", values_callable=enum_values),
        nullable=False,
        default=SubmissionStatus.PENDING,
        server_default=SubmissionStatus.PENDING.value,
        index=True,
    )
    reviewed_by = Column(Text)
    reviewed_at = Column(TIMESTAMP(timezone=True))
    rejection_reason = Column(Text)
    submitted_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), index=True)

    __table_args__ = (
        CheckConstraint("receipt_data IS NOT NULL OR receipt_url IS NOT NULL", name="chk_submission_receipt_present"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @validates("amount", "reference_code")
    def _validate_write_once(self, key, value):
        # Fee and reference code are fixed at creation.
        current = self.__dict__.get(key)
        if inspect(self).has_identity or (current is not None and current != value):
            raise ValueError(f"{key} cannot be changed once set")
        return value

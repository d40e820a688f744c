"""Cross-reference lookups shared by rules that look beyond the current row."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from clinic_compliance.mapping.models import BillingRecord, DoctorRecord


@dataclass
class CrossReferenceIndex:
    """Doctor roster lookups plus the visit -> patient map built during a scan.

    ``doctor_by_id`` is fixed once built (duplicate roster IDs are
    last-write-wins). The visit maps grow as billing rows are observed, in
    input order, so a row's R1 outcome depends only on the rows before it.
    """

    doctor_by_id: dict[str, DoctorRecord] = field(default_factory=dict)
    specialization_by_id: dict[str, str] = field(default_factory=dict)
    visit_patients: dict[str, set[str]] = field(default_factory=dict)
    first_patient_by_visit: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_doctors(cls, doctors: Iterable[DoctorRecord]) -> CrossReferenceIndex:
        index = cls()
        for doctor in doctors:
            if not doctor.doctor_id:
                continue
            index.doctor_by_id[doctor.doctor_id] = doctor
            if doctor.specialization:
                index.specialization_by_id[doctor.doctor_id] = doctor.specialization
            else:
                index.specialization_by_id.pop(doctor.doctor_id, None)
        return index

    def lookup_doctor(self, doctor_id: str | None) -> DoctorRecord | None:
        if not doctor_id:
            return None
        return self.doctor_by_id.get(doctor_id)

    def specialization_for(self, doctor_id: str | None) -> str | None:
        if not doctor_id:
            return None
        return self.specialization_by_id.get(doctor_id)

    def observe_visit(self, record: BillingRecord) -> None:
        """Record the (Visit_ID, Patient_ID) pair of a billing row."""
        if not record.visit_id or not record.patient_id:
            return
        self.visit_patients.setdefault(record.visit_id, set()).add(record.patient_id)
        self.first_patient_by_visit.setdefault(record.visit_id, record.patient_id)

    def conflicting_patient(self, record: BillingRecord) -> str | None:
        """Patient first seen on this visit, when it differs from the row's own."""
        if not record.visit_id or not record.patient_id:
            return None
        first = self.first_patient_by_visit.get(record.visit_id)
        if first is not None and first != record.patient_id:
            return first
        return None

    def shared_visits(self) -> dict[str, set[str]]:
        """Visits recorded against more than one distinct patient."""
        return {
            visit_id: set(patients)
            for visit_id, patients in self.visit_patients.items()
            if len(patients) > 1
        }

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

from ..models.appointment import AppointmentStatus, BooksAppointment
from ..models.doctor import DoctorWorkSchedule
from .base import BaseRepository


def _day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class BookingRepository(BaseRepository[BooksAppointment]):
    model = BooksAppointment
    id_column = "book_id"

    def get_work_schedules(self, doctor_id: str, day: date, lock: bool = False) -> List[DoctorWorkSchedule]:
        """Schedule rows of ``doctor_id`` on ``day``.

        With ``lock`` the rows are selected FOR UPDATE so concurrent bookings
        of the same doctor and day queue behind each other until commit.
        SQLite ignores the lock.
        """
        start, end = _day_bounds(day)
        query = self.db.query(DoctorWorkSchedule).filter(
            DoctorWorkSchedule.doctor_id == doctor_id,
            DoctorWorkSchedule.date_work >= start,
            DoctorWorkSchedule.date_work < end
        )
        if lock:
            query = query.with_for_update()
        return query.all()

    def get_active_for_doctor_on(self, doctor_id: str, day: date) -> Optional[BooksAppointment]:
        """First non-cancelled appointment of ``doctor_id`` on ``day``."""
        start, end = _day_bounds(day)
        return self.db.query(BooksAppointment).filter(
            BooksAppointment.doctor_id == doctor_id,
            BooksAppointment.book_date >= start,
            BooksAppointment.book_date < end,
            BooksAppointment.status != AppointmentStatus.CANCELLED.value
        ).first()

    def get_by_patient(self, patient_id: str) -> List[BooksAppointment]:
        return self.db.query(BooksAppointment).filter(
            BooksAppointment.patient_id == patient_id
        ).order_by(BooksAppointment.book_date).all()

    def get_by_doctor(self, doctor_id: str) -> List[BooksAppointment]:
        return self.db.query(BooksAppointment).filter(
            BooksAppointment.doctor_id == doctor_id
        ).order_by(BooksAppointment.book_date).all()

    def get_by_patients(self, patient_ids: Iterable[str]) -> List[BooksAppointment]:
        patient_ids = list(patient_ids)
        if not patient_ids:
            return []
        return self.db.query(BooksAppointment).filter(
            BooksAppointment.patient_id.in_(patient_ids)
        ).order_by(BooksAppointment.book_date).all()

    def get_all(self) -> List[BooksAppointment]:
        return self.db.query(BooksAppointment).order_by(BooksAppointment.book_date).all()

    def save(self) -> None:
        """Commit changes made to already loaded appointments."""
        self.db.commit()

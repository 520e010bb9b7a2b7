from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import date
from typing import List, Optional
import logging

from ..core.results import FailureKind, ServiceResult
from ..core.security import CallerContext, UserRole
from ..core.sequence import APPOINTMENT_PREFIX, next_id
from ..models.appointment import AppointmentStatus, BooksAppointment
from ..repositories.booking_repository import BookingRepository
from ..repositories.user_repository import UserRepository
from ..schemas.appointment import BookAppointmentRequest

logger = logging.getLogger(__name__)

# User-facing messages
INVALID_BOOKING_DATE = "Ngày đặt lịch không hợp lệ"
DOCTOR_NOT_WORKING = "Bác sĩ không làm việc vào thời gian này"
DOCTOR_ALREADY_BOOKED = "Bác sĩ đã có lịch hẹn trong ngày này"
PATIENT_NOT_FOUND = "Không tìm thấy hồ sơ bệnh nhân"
DOCTOR_NOT_FOUND = "Không tìm thấy hồ sơ bác sĩ"
APPOINTMENT_NOT_FOUND = "Không tìm thấy lịch hẹn"
APPOINTMENT_FORBIDDEN = "Bạn không có quyền thao tác trên lịch hẹn này"
CANNOT_CHECK_IN = "Chỉ có thể check-in lịch hẹn đã đặt thành công"
CANNOT_CHECK_OUT = "Chỉ có thể hoàn tất lịch hẹn đã check-in"
CANNOT_CANCEL = "Không thể hủy lịch hẹn ở trạng thái hiện tại"
BOOKING_FAILED = "Đặt lịch không thành công, vui lòng thử lại"

CHECK_IN_CONFIRMED = "Patient check-in confirmed."
CHECKOUT_COMPLETED = "Doctor checkout completed."
CANCELLED_BY_PATIENT = "Appointment cancelled by patient."
CANCELLED_BY_DOCTOR = "Appointment cancelled by doctor."

# Statuses from which each transition is allowed
CHECK_IN_FROM = {AppointmentStatus.BOOKED}
CHECK_OUT_FROM = {AppointmentStatus.CONFIRMED}
PATIENT_CANCEL_FROM = {AppointmentStatus.BOOKED, AppointmentStatus.CONFIRMED}
DOCTOR_CANCEL_FROM = {AppointmentStatus.BOOKED}


class BookingService:
    def __init__(self, db: Session):
        self.db = db
        self.bookings = BookingRepository(db)
        self.users = UserRepository(db)

    def book_appointment(
        self, request: BookAppointmentRequest, caller: CallerContext
    ) -> ServiceResult[BooksAppointment]:
        """Validate a booking request and create the appointment.

        Checks run in order and the first failure is returned:
        the date must not be in the past, the doctor must not already
        have a non-cancelled appointment that day, and the doctor must
        have a work schedule on that day.
        """
        patient = self.users.get_patient_by_user_id(caller.user_id)
        if not patient:
            return ServiceResult.fail(FailureKind.NOT_FOUND, PATIENT_NOT_FOUND)

        day = request.book_date.date()
        if day < date.today():
            logger.info(f"Rejected booking for {request.doctor_id}: {day} is in the past")
            return ServiceResult.fail(FailureKind.INVALID_DATE, INVALID_BOOKING_DATE)

        # Locks the doctor's schedule rows for the day until commit
        schedules = self.bookings.get_work_schedules(request.doctor_id, day, lock=True)

        if self.bookings.get_active_for_doctor_on(request.doctor_id, day):
            logger.info(f"Rejected booking for {request.doctor_id}: already booked on {day}")
            return ServiceResult.fail(FailureKind.DOCTOR_ALREADY_BOOKED, DOCTOR_ALREADY_BOOKED)

        if not schedules:
            logger.info(f"Rejected booking for {request.doctor_id}: not working on {day}")
            return ServiceResult.fail(FailureKind.DOCTOR_NOT_WORKING, DOCTOR_NOT_WORKING)

        last = self.bookings.get_last(APPOINTMENT_PREFIX)
        book_id = next_id(APPOINTMENT_PREFIX, last.book_id if last else None)
        appointment = BooksAppointment(
            book_id=book_id,
            patient_id=patient.patient_id,
            doctor_id=request.doctor_id,
            booking_type=request.booking_type,
            book_date=request.book_date,
            status=AppointmentStatus.BOOKED.value,
            note=request.note,
        )
        try:
            appointment = self.bookings.add(appointment)
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Failed to store appointment {book_id}: {str(e)}")
            return ServiceResult.fail(FailureKind.WRITE_FAILED, BOOKING_FAILED)
        logger.info(f"Appointment {appointment.book_id} booked by patient {patient.patient_id}")
        return ServiceResult.success(appointment)

    def patient_check_in(self, book_id: str, caller: CallerContext) -> ServiceResult:
        return self._transition(
            book_id, caller, CHECK_IN_FROM, AppointmentStatus.CONFIRMED,
            CANNOT_CHECK_IN, CHECK_IN_CONFIRMED
        )

    def doctor_checkout(self, book_id: str, caller: CallerContext) -> ServiceResult:
        return self._transition(
            book_id, caller, CHECK_OUT_FROM, AppointmentStatus.COMPLETED,
            CANNOT_CHECK_OUT, CHECKOUT_COMPLETED
        )

    def cancel_by_patient(self, book_id: str, reason: Optional[str], caller: CallerContext) -> ServiceResult:
        return self._transition(
            book_id, caller, PATIENT_CANCEL_FROM, AppointmentStatus.CANCELLED,
            CANNOT_CANCEL, CANCELLED_BY_PATIENT, reason=reason
        )

    def cancel_by_doctor(self, book_id: str, reason: Optional[str], caller: CallerContext) -> ServiceResult:
        return self._transition(
            book_id, caller, DOCTOR_CANCEL_FROM, AppointmentStatus.CANCELLED,
            CANNOT_CANCEL, CANCELLED_BY_DOCTOR, reason=reason
        )

    def get_my_appointments(self, caller: CallerContext) -> ServiceResult[List[BooksAppointment]]:
        patient = self.users.get_patient_by_user_id(caller.user_id)
        if not patient:
            return ServiceResult.fail(FailureKind.NOT_FOUND, PATIENT_NOT_FOUND)
        return ServiceResult.success(self.bookings.get_by_patient(patient.patient_id))

    def get_doctor_appointments(self, caller: CallerContext) -> ServiceResult[List[BooksAppointment]]:
        doctor = self.users.get_doctor_by_user_id(caller.user_id)
        if not doctor:
            return ServiceResult.fail(FailureKind.NOT_FOUND, DOCTOR_NOT_FOUND)
        return ServiceResult.success(self.bookings.get_by_doctor(doctor.doctor_id))

    def get_appointments_of_my_patients(self, caller: CallerContext) -> ServiceResult[List[BooksAppointment]]:
        """Every appointment of every patient who has booked with the calling doctor."""
        doctor = self.users.get_doctor_by_user_id(caller.user_id)
        if not doctor:
            return ServiceResult.fail(FailureKind.NOT_FOUND, DOCTOR_NOT_FOUND)
        patient_ids = {a.patient_id for a in self.bookings.get_by_doctor(doctor.doctor_id)}
        return ServiceResult.success(self.bookings.get_by_patients(patient_ids))

    def get_all_appointments_for_staff(self) -> List[BooksAppointment]:
        return self.bookings.get_all()

    def _transition(
        self,
        book_id: str,
        caller: CallerContext,
        allowed_from: set,
        target: AppointmentStatus,
        rejection: str,
        confirmation: str,
        reason: Optional[str] = None,
    ) -> ServiceResult:
        appointment = self.bookings.get_by_id(book_id)
        if not appointment:
            return ServiceResult.fail(FailureKind.NOT_FOUND, APPOINTMENT_NOT_FOUND)

        if not self._can_act_on(appointment, caller):
            return ServiceResult.fail(FailureKind.FORBIDDEN, APPOINTMENT_FORBIDDEN)

        current = appointment.status
        if current not in {status.value for status in allowed_from}:
            logger.warning(f"Rejected {current!r} -> {target.value!r} for appointment {book_id}")
            return ServiceResult.fail(FailureKind.INVALID_STATUS, rejection)

        appointment.status = target.value
        if reason is not None:
            appointment.cancelled_reason = reason
        self.bookings.save()

        logger.info(f"Appointment {book_id}: {current!r} -> {target.value!r}")
        return ServiceResult.success(appointment, confirmation)

    def _can_act_on(self, appointment: BooksAppointment, caller: CallerContext) -> bool:
        """Patients act on their own appointments, doctors on those assigned to them."""
        if caller.role == UserRole.PATIENT:
            patient = self.users.get_patient_by_user_id(caller.user_id)
            return patient is not None and patient.patient_id == appointment.patient_id

        if caller.role == UserRole.DOCTOR:
            doctor = self.users.get_doctor_by_user_id(caller.user_id)
            return doctor is not None and doctor.doctor_id == appointment.doctor_id

        return caller.role in (UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF)

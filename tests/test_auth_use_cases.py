from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from app.application.dtos.user_dtos import (
    CreateUserDto,
    ForgotPasswordDto,
    LoginUserDto,
    ResendVerificationDto,
    ResetPasswordDto,
    UpdateProfileDto,
    VerifyOtpDto,
)
from app.application.use_cases.email_verification_use_case import EmailVerificationUseCase
from app.application.use_cases.forgot_password_use_case import ForgotPasswordUseCase
from app.application.use_cases.get_user_profile import GetUserProfileUseCase
from app.application.use_cases.login_user import LoginUserUseCase
from app.application.use_cases.register_user import RegisterUserUseCase
from app.application.use_cases.resend_verification_use_case import ResendVerificationUseCase
from app.application.use_cases.reset_password_use_case import ResetPasswordUseCase
from app.application.use_cases.session_use_cases import SessionManager
from app.application.use_cases.update_user_profile import UpdateUserProfileUseCase
from app.core.security import verify_password
from app.domain.enums import NotificationKind, OtpPurpose, UserRole
from app.domain.exceptions import (
    AlreadyVerifiedError,
    AttemptsExhaustedError,
    CodeAlreadyUsedError,
    CodeExpiredError,
    ConflictError,
    EmailNotVerifiedError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    UpstreamUnavailableError,
    ValidationError,
)
from app.domain.value_objects.entity_ids import UserId
from app.infrastructure.orm import OneTimeCodeModel, SessionModel, UserModel

from conftest import FakeEmailService, PASSWORD, run

EMAIL = "casey@example.com"


def register(uow, email_service, **overrides):
    data = {"name": "Casey", "email": EMAIL, "phone": "+15550199", "password": PASSWORD}
    data.update(overrides)
    return run(RegisterUserUseCase(uow, email_service).execute(CreateUserDto(**data)))


def verify(uow, user_id, otp):
    return run(EmailVerificationUseCase(uow).execute(VerifyOtpDto(user_id=user_id, otp=otp)))


def codes(db, purpose=OtpPurpose.EMAIL_VERIFICATION):
    db.expire_all()
    return (
        db.query(OneTimeCodeModel)
        .filter(OneTimeCodeModel.email == EMAIL, OneTimeCodeModel.purpose == purpose)
        .order_by(OneTimeCodeModel.created_at)
        .all()
    )


def wrong(code: str) -> str:
    return "0" * len(code) if code != "0" * len(code) else "1" * len(code)


class TestRegistration:

    def test_creates_unverified_user_and_sends_code(self, uow, db, email_service):
        result = register(uow, email_service, role=UserRole.MANAGER, company="Acme")

        user = db.query(UserModel).filter(UserModel.email == EMAIL).one()
        assert result.user_id == user.id
        assert result.role == "manager"
        assert result.requires_otp is True
        assert result.verification_email_sent is True
        assert result.warning is None
        assert user.is_email_verified is False
        assert verify_password(PASSWORD, user.hashed_password)
        assert user.hashed_password.startswith("$2b$04$")

        kind, recipient, payload = email_service.sent[-1]
        assert kind == NotificationKind.EMAIL_VERIFICATION
        assert recipient == EMAIL
        assert payload["code"] == codes(db)[-1].code
        assert len(payload["code"]) == 6 and payload["code"].isdigit()

    def test_default_role_is_sales_rep(self, uow, email_service):
        assert register(uow, email_service).role == "sales_rep"

    def test_email_is_normalised(self, uow, db, email_service):
        register(uow, email_service, email="Casey@Example.com")

        assert db.query(UserModel).filter(UserModel.email == EMAIL).count() == 1

    def test_duplicate_email_conflicts(self, uow, email_service):
        register(uow, email_service)

        with pytest.raises(ConflictError) as exc:
            register(uow, email_service)
        assert exc.value.code == "duplicate_email"

    def test_failed_email_keeps_the_account_and_warns(self, uow, db):
        result = register(uow, FakeEmailService(fail=True))

        assert result.verification_email_sent is False
        assert result.warning
        assert db.query(UserModel).filter(UserModel.email == EMAIL).count() == 1
        assert len(codes(db)) == 1


class TestEmailVerification:

    def test_correct_code_verifies_and_starts_a_session(self, uow, db, email_service):
        registered = register(uow, email_service)

        result = verify(uow, registered.user_id, email_service.last_code())

        assert result.user.is_email_verified is True
        assert result.token
        assert codes(db)[-1].is_used is True
        session = db.query(SessionModel).filter(SessionModel.token == result.token).one()
        assert session.id == result.session_id
        assert session.is_active is True
        context = run(SessionManager(uow).validate(result.token))
        assert context.user.id == UserId(registered.user_id)

    def test_wrong_code_counts_an_attempt(self, uow, db, email_service):
        registered = register(uow, email_service)
        code = email_service.last_code()

        with pytest.raises(InvalidCodeError):
            verify(uow, registered.user_id, wrong(code))

        assert codes(db)[-1].attempts == 1
        assert codes(db)[-1].is_used is False

    def test_full_width_digits_count_as_a_wrong_code(self, uow, db, email_service):
        registered = register(uow, email_service)

        with pytest.raises(InvalidCodeError):
            verify(uow, registered.user_id, "\uff11\uff12\uff13\uff14\uff15\uff16")

        assert codes(db)[-1].attempts == 1

    def test_attempts_are_capped(self, uow, email_service):
        registered = register(uow, email_service)
        code = email_service.last_code()

        for _ in range(5):
            with pytest.raises(InvalidCodeError):
                verify(uow, registered.user_id, wrong(code))

        # Even the right code is refused once the budget is spent
        with pytest.raises(AttemptsExhaustedError):
            verify(uow, registered.user_id, code)

    def test_expired_code(self, uow, db, email_service):
        registered = register(uow, email_service)
        db.query(OneTimeCodeModel).update({OneTimeCodeModel.expires_at: datetime.utcnow() - timedelta(minutes=1)})
        db.commit()

        with pytest.raises(CodeExpiredError):
            verify(uow, registered.user_id, email_service.last_code())

    def test_used_code(self, uow, db, email_service):
        registered = register(uow, email_service)
        db.query(OneTimeCodeModel).update({OneTimeCodeModel.is_used: True})
        db.commit()

        with pytest.raises(CodeAlreadyUsedError):
            verify(uow, registered.user_id, email_service.last_code())

    def test_already_verified(self, uow, email_service):
        registered = register(uow, email_service)
        verify(uow, registered.user_id, email_service.last_code())

        with pytest.raises(AlreadyVerifiedError):
            verify(uow, registered.user_id, email_service.last_code())

    def test_unknown_user(self, uow):
        with pytest.raises(NotFoundError):
            verify(uow, uuid4(), "123456")


class TestResendVerification:

    def test_resend_invalidates_previous_codes(self, uow, db, email_service):
        registered = register(uow, email_service)
        first_code = email_service.last_code()

        run(ResendVerificationUseCase(uow, email_service).execute(ResendVerificationDto(email=EMAIL)))

        stored = codes(db)
        assert len(stored) == 2
        assert stored[0].is_used is True
        assert stored[1].is_used is False
        second_code = email_service.last_code()
        assert stored[1].code == second_code

        if first_code != second_code:
            with pytest.raises(InvalidCodeError):
                verify(uow, registered.user_id, first_code)
        assert verify(uow, registered.user_id, second_code).user.is_email_verified

    def test_unknown_email(self, uow, email_service):
        with pytest.raises(NotFoundError):
            run(ResendVerificationUseCase(uow, email_service).execute(ResendVerificationDto(email=EMAIL)))

    def test_verified_user(self, uow, email_service, make_user):
        make_user(email=EMAIL)

        with pytest.raises(AlreadyVerifiedError):
            run(ResendVerificationUseCase(uow, email_service).execute(ResendVerificationDto(email=EMAIL)))

    def test_delivery_failure_is_reported(self, uow, db, make_user):
        make_user(email=EMAIL, verified=False)

        with pytest.raises(UpstreamUnavailableError):
            run(ResendVerificationUseCase(uow, FakeEmailService(fail=True)).execute(ResendVerificationDto(email=EMAIL)))

        assert len(codes(db)) == 1


class TestLogin:

    def login(self, uow, email=EMAIL, password=PASSWORD):
        return run(LoginUserUseCase(uow).execute(LoginUserDto(email=email, password=password, device_type="desktop")))

    def test_success_issues_session_and_records_login(self, uow, db, make_user):
        user = make_user(email=EMAIL)

        result = self.login(uow)

        assert result.user.id == user.id
        db.expire_all()
        assert db.query(UserModel).filter(UserModel.id == user.id).one().last_login is not None
        session = db.query(SessionModel).filter(SessionModel.token == result.token).one()
        assert session.device_info["device_type"] == "desktop"

    def test_unknown_email_and_wrong_password_look_the_same(self, uow, make_user):
        make_user(email=EMAIL)

        with pytest.raises(InvalidCredentialsError) as unknown:
            self.login(uow, email="nobody@example.com")
        with pytest.raises(InvalidCredentialsError) as wrong_password:
            self.login(uow, password="not-it")

        assert unknown.value.message == wrong_password.value.message
        assert unknown.value.code == wrong_password.value.code

    def test_unverified_email(self, uow, make_user):
        make_user(email=EMAIL, verified=False)

        with pytest.raises(EmailNotVerifiedError):
            self.login(uow)

    def test_inactive_account(self, uow, make_user):
        make_user(email=EMAIL, active=False)

        with pytest.raises(UnauthorizedError):
            self.login(uow)


class TestPasswordReset:

    def forgot(self, uow, email_service, email=EMAIL):
        return run(ForgotPasswordUseCase(uow, email_service).execute(ForgotPasswordDto(email=email)))

    def reset(self, uow, code, new_password="N3w-password!"):
        dto = ResetPasswordDto(email=EMAIL, code=code, new_password=new_password)
        return run(ResetPasswordUseCase(uow).execute(dto))

    def test_unknown_email_gets_the_generic_answer(self, uow, email_service, make_user):
        make_user(email=EMAIL)

        unknown = self.forgot(uow, email_service, email="nobody@example.com")
        known = self.forgot(uow, email_service)

        assert unknown.message == known.message
        assert [to for _, to, _ in email_service.sent] == [EMAIL]

    def test_reset_replaces_password_and_revokes_sessions(self, uow, db, email_service, make_user):
        user = make_user(email=EMAIL)
        login = run(LoginUserUseCase(uow).execute(LoginUserDto(email=EMAIL, password=PASSWORD)))
        self.forgot(uow, email_service)

        self.reset(uow, email_service.last_code())

        db.expire_all()
        stored = db.query(UserModel).filter(UserModel.id == user.id).one()
        assert verify_password("N3w-password!", stored.hashed_password)
        assert codes(db, OtpPurpose.PASSWORD_RESET)[-1].is_used is True
        with pytest.raises(UnauthorizedError):
            run(SessionManager(uow).validate(login.token))

    def test_new_request_invalidates_the_previous_code(self, uow, db, email_service, make_user):
        make_user(email=EMAIL)
        self.forgot(uow, email_service)
        self.forgot(uow, email_service)

        stored = codes(db, OtpPurpose.PASSWORD_RESET)
        assert [c.is_used for c in stored] == [True, False]

    def test_mismatch_counts_an_attempt(self, uow, db, email_service, make_user):
        make_user(email=EMAIL)
        self.forgot(uow, email_service)
        code = email_service.last_code()

        with pytest.raises(InvalidCodeError):
            self.reset(uow, wrong(code))

        assert codes(db, OtpPurpose.PASSWORD_RESET)[-1].attempts == 1

    def test_non_ascii_code_counts_an_attempt(self, uow, db, email_service, make_user):
        make_user(email=EMAIL)
        self.forgot(uow, email_service)

        with pytest.raises(InvalidCodeError):
            self.reset(uow, "\u0661\u0662\u0663\u0664\u0665\u0666")

        assert codes(db, OtpPurpose.PASSWORD_RESET)[-1].attempts == 1

    def test_exhausted_code(self, uow, email_service, make_user):
        make_user(email=EMAIL)
        self.forgot(uow, email_service)
        code = email_service.last_code()
        for _ in range(5):
            with pytest.raises(InvalidCodeError):
                self.reset(uow, wrong(code))

        with pytest.raises(AttemptsExhaustedError):
            self.reset(uow, code)

    def test_expired_code(self, uow, db, email_service, make_user):
        make_user(email=EMAIL)
        self.forgot(uow, email_service)
        db.query(OneTimeCodeModel).update({OneTimeCodeModel.expires_at: datetime.utcnow() - timedelta(seconds=1)})
        db.commit()

        with pytest.raises(CodeExpiredError):
            self.reset(uow, email_service.last_code())

    def test_without_a_code(self, uow, make_user):
        make_user(email=EMAIL)

        with pytest.raises(NotFoundError):
            self.reset(uow, "123456")


class TestProfile:

    def test_profile_carries_the_stats_snapshot(self, uow, make_user):
        user = make_user(email=EMAIL, stats_total_recordings=12, stats_avg_spin_score=64, stats_total_appointments=3)

        profile = run(GetUserProfileUseCase(uow).execute(UserId(user.id)))

        assert profile.email == EMAIL
        assert profile.joined_date == user.created_at.date().isoformat()
        assert profile.stats.total_calls == 12
        assert profile.stats.avg_spin_score == 64
        assert profile.stats.total_appointments == 3

    def test_update_name_and_phone(self, uow, db, make_user):
        user = make_user(email=EMAIL)

        result = run(UpdateUserProfileUseCase(uow).execute(UserId(user.id), UpdateProfileDto(name="  Casey J ")))

        assert result.name == "Casey J"
        assert result.phone == "+15550100"

    def test_update_without_fields(self, uow, make_user):
        user = make_user(email=EMAIL)

        with pytest.raises(ValidationError):
            run(UpdateUserProfileUseCase(uow).execute(UserId(user.id), UpdateProfileDto()))

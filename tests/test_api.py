from datetime import datetime, timedelta
from uuid import UUID, uuid4

from app.db.database import SessionLocal
from app.domain.enums import RecordingStatus
from app.infrastructure.orm import AppointmentModel, RecordingModel, SessionModel

from conftest import PASSWORD

API = "/api/v1"
EMAIL = "jordan@example.com"


def register_and_verify(client, email_service, email=EMAIL):
    response = client.post(f"{API}/auth/register", json={
        "name": "Jordan", "email": email, "phone": "+15550123", "password": PASSWORD,
    })
    assert response.status_code == 201, response.text
    user_id = response.json()["user_id"]

    response = client.post(f"{API}/auth/verify-otp", json={
        "userId": user_id, "otp": email_service.last_code(email), "deviceType": "mobile", "platform": "android",
    })
    assert response.status_code == 200, response.text
    return response.json()


def login(client, email=EMAIL, password=PASSWORD):
    return client.post(f"{API}/auth/login", json={"email": email, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    response = client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


def test_register_verify_login_and_logout(client, email_service):
    verified = register_and_verify(client, email_service)
    assert verified["user"]["is_email_verified"] is True

    response = login(client)
    assert response.status_code == 200
    token = response.json()["token"]

    assert client.get(f"{API}/profile", headers=bearer(token)).json()["email"] == EMAIL

    assert client.post(f"{API}/auth/logout", headers=bearer(token)).status_code == 200
    response = client.get(f"{API}/profile", headers=bearer(token))
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_register_reports_failed_email(client, email_service):
    email_service.fail = True

    response = client.post(f"{API}/auth/register", json={
        "name": "Jordan", "email": EMAIL, "phone": "+15550123", "password": PASSWORD,
    })

    assert response.status_code == 201
    assert response.json()["verification_email_sent"] is False
    assert response.json()["warning"]


def test_duplicate_registration_is_a_conflict(client, email_service):
    register_and_verify(client, email_service)

    response = client.post(f"{API}/auth/register", json={
        "name": "Jordan", "email": EMAIL, "phone": "+15550123", "password": PASSWORD,
    })

    assert response.status_code == 409
    assert response.json()["code"] == "duplicate_email"


def test_missing_fields_are_rejected(client):
    response = client.post(f"{API}/auth/register", json={"email": EMAIL})

    assert response.status_code == 422


def test_wrong_password_is_unauthorized(client, email_service):
    register_and_verify(client, email_service)

    response = login(client, password="wrong")

    assert response.status_code == 401
    assert response.json() == {"success": False, "code": "invalid_credentials", "message": "Invalid email or password"}


def test_unverified_login(client):
    client.post(f"{API}/auth/register", json={
        "name": "Jordan", "email": EMAIL, "phone": "+15550123", "password": PASSWORD,
    })

    response = login(client)

    assert response.status_code == 401
    assert response.json()["code"] == "email_not_verified"


def test_wrong_otp_then_exhausted(client, email_service):
    response = client.post(f"{API}/auth/register", json={
        "name": "Jordan", "email": EMAIL, "phone": "+15550123", "password": PASSWORD,
    })
    user_id = response.json()["user_id"]
    code = email_service.last_code()
    wrong = "0" * len(code) if code != "0" * len(code) else "1" * len(code)

    for _ in range(5):
        response = client.post(f"{API}/auth/verify-otp", json={"user_id": user_id, "otp": wrong})
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_code"

    response = client.post(f"{API}/auth/verify-otp", json={"user_id": user_id, "otp": code})
    assert response.status_code == 429
    assert response.json()["code"] == "attempts_exhausted"


def test_non_ascii_otp_is_a_wrong_code(client, email_service):
    response = client.post(f"{API}/auth/register", json={
        "name": "Jordan", "email": EMAIL, "phone": "+15550123", "password": PASSWORD,
    })
    user_id = response.json()["user_id"]

    response = client.post(f"{API}/auth/verify-otp", json={"userId": user_id, "otp": "\uff11\uff12\uff13\uff14\uff15\uff16"})

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_code"


def test_missing_token(client):
    response = client.get(f"{API}/auth/sessions")

    assert response.status_code == 401


def test_sessions_listing_and_revoking_the_others(client, email_service):
    first = register_and_verify(client, email_service)["token"]
    second = login(client).json()["token"]
    third = login(client).json()["token"]

    sessions = client.get(f"{API}/auth/sessions", headers=bearer(second)).json()["sessions"]
    assert len(sessions) == 3
    assert [s["is_current"] for s in sessions].count(True) == 1
    assert sessions[0]["is_current"] is True

    response = client.post(f"{API}/auth/revoke-sessions", headers=bearer(second))
    assert response.json()["revoked_count"] == 2

    assert client.get(f"{API}/auth/sessions", headers=bearer(first)).status_code == 401
    assert client.get(f"{API}/auth/sessions", headers=bearer(third)).status_code == 401
    remaining = client.get(f"{API}/auth/sessions", headers=bearer(second)).json()["sessions"]
    assert len(remaining) == 1


def test_expired_session_is_rejected_and_revoked(client, email_service):
    token = register_and_verify(client, email_service)["token"]
    db = SessionLocal()
    try:
        db.query(SessionModel).filter(SessionModel.token == token).update(
            {SessionModel.expires_at: datetime.utcnow() - timedelta(seconds=1)}
        )
        db.commit()

        assert client.get(f"{API}/profile", headers=bearer(token)).status_code == 401

        db.expire_all()
        assert db.query(SessionModel).filter(SessionModel.token == token).one().is_active is False
    finally:
        db.close()


def test_update_profile(client, email_service):
    token = register_and_verify(client, email_service)["token"]

    response = client.put(f"{API}/profile", headers=bearer(token), json={"phone": "+15550999"})
    assert response.status_code == 200
    assert response.json()["phone"] == "+15550999"

    response = client.put(f"{API}/profile", headers=bearer(token), json={})
    assert response.status_code == 400


def test_forgot_and_reset_password(client, email_service):
    register_and_verify(client, email_service)

    assert client.post(f"{API}/auth/forgot-password", json={"email": EMAIL}).status_code == 200
    response = client.post(f"{API}/auth/reset-password", json={
        "email": EMAIL, "code": email_service.last_code(), "newPassword": "An0ther-secret",
    })
    assert response.status_code == 200

    assert login(client).status_code == 401
    assert login(client, password="An0ther-secret").status_code == 200


def test_dashboard_stats(client, email_service):
    verified = register_and_verify(client, email_service)
    user_id, token = verified["user"]["id"], verified["token"]
    now = datetime.utcnow()

    db = SessionLocal()
    try:
        for score, sentiment, age, status in [
            (80, "positive", timedelta(days=1), RecordingStatus.ACTIVE),
            (60, "negative", timedelta(days=2), RecordingStatus.ACTIVE),
            (None, None, timedelta(days=3), RecordingStatus.ACTIVE),
            (10, "negative", timedelta(days=1), RecordingStatus.DELETED),
            (90, "positive", timedelta(days=400), RecordingStatus.ACTIVE),
        ]:
            analysis = {}
            if score is not None:
                analysis = {"spin": {"overall": {"score": score}}, "sentiment": {"overall": sentiment}}
            db.add(RecordingModel(
                id=uuid4(), user_id=UUID(user_id), title="Discovery call",
                status=status, analysis=analysis, created_at=now - age,
            ))
        db.add(AppointmentModel(id=uuid4(), user_id=UUID(user_id), client_name="Acme", scheduled_date=now))
        db.commit()
    finally:
        db.close()

    all_time = client.get(f"{API}/dashboard/stats", headers=bearer(token)).json()
    assert all_time["total_calls"] == 4
    assert all_time["avg_spin_score"] == 77
    assert all_time["total_appointments"] == 1
    assert all_time["window_start"] is None

    week = client.get(f"{API}/dashboard/stats", params={"period": "week"}, headers=bearer(token)).json()
    assert week["total_calls"] == 3
    assert week["avg_spin_score"] == 70
    assert week["sentiment_distribution"] == {"positive": 50, "neutral": 0, "negative": 50}
    assert week["spin_trends"]["labels"] == ["Week 1", "Week 2", "Week 3", "Week 4"]
    assert week["spin_trends"]["scores"][-1] == 70
    assert week["weekly_improvement"] == 70

    start = (now - timedelta(days=500)).date().isoformat()
    end = (now - timedelta(days=300)).date().isoformat()
    old = client.get(
        f"{API}/dashboard/stats", params={"startDate": start, "endDate": end}, headers=bearer(token)
    ).json()
    assert old["total_calls"] == 1
    assert old["total_appointments"] == 0

def test_dashboard_stats_for_an_inverted_range_is_empty(client, email_service):
    verified = register_and_verify(client, email_service)
    user_id, token = verified["user"]["id"], verified["token"]

    db = SessionLocal()
    try:
        db.add(RecordingModel(
            id=uuid4(), user_id=UUID(user_id), title="Demo call", status=RecordingStatus.ACTIVE,
            analysis={"spin": {"overall": {"score": 70}}}, created_at=datetime(2024, 3, 5),
        ))
        db.commit()
    finally:
        db.close()

    for params in ({"startDate": "2099-01-01"}, {"startDate": "2024-03-10", "endDate": "2024-03-01"}):
        response = client.get(f"{API}/dashboard/stats", params=params, headers=bearer(token))

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["total_calls"] == 0
        assert body["avg_spin_score"] == 0
        assert body["total_appointments"] == 0
        assert body["window_start"] > body["window_end"]

import base64

import pytest

SIGNUP = {"lec_name": "Dr. Obi", "signin_email": "obi@landmark.edu", "signin_password": "secret"}


@pytest.fixture()
def registered(client):
    response = client.post("/api/lecturer/signup", json=SIGNUP)
    assert response.status_code == 200, response.text
    return SIGNUP


def test_signup_sends_welcome_mail(client, mail):
    response = client.post("/api/lecturer/signup", json=SIGNUP)
    assert response.json() == {"success": True, "message": "Lecturer registered successfully."}
    assert len(mail.sent) == 1
    assert mail.sent[0]["to"] == "obi@landmark.edu"
    assert "Welcome, Dr. Obi!" in mail.sent[0]["html"]


def test_signup_survives_mail_failure(client, mail):
    mail.fail = True
    response = client.post("/api/lecturer/signup", json=SIGNUP)
    assert response.status_code == 200
    assert client.post("/api/lecturer/login", json=SIGNUP).status_code == 200


def test_signup_validation_and_conflict(client, registered):
    missing = client.post("/api/lecturer/signup", json={"lec_name": "X", "signin_email": "x@y.z"})
    assert missing.status_code == 400
    assert missing.json() == {"error": "All fields are required."}

    duplicate = client.post("/api/lecturer/signup", json={**SIGNUP, "signin_email": "OBI@landmark.edu"})
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Email already exists."}


def test_login(client, registered):
    ok = client.post("/api/lecturer/login", json=registered)
    assert ok.json() == {"success": True, "lec_name": "Dr. Obi", "message": "login successful"}

    bad = client.post("/api/lecturer/login", json={**registered, "signin_password": "nope"})
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid email or password."}

    assert client.post("/api/lecturer/login", json={"signin_email": "obi@landmark.edu"}).status_code == 400


def test_check_email_and_list(client, registered):
    assert client.post("/api/lecturer/check-email", json={"email": "Obi@Landmark.edu"}).json() == {"exists": True}
    assert client.post("/api/lecturer/check-email", json={"email": "x@landmark.edu"}).json() == {"exists": False}
    lecturers = client.get("/api/lecturers").json()
    assert [l["signin_email"] for l in lecturers] == ["obi@landmark.edu"]


def test_forgot_password(client, registered, mail):
    mail.sent.clear()
    response = client.post("/api/lecturer/forgot-password", json={"signin_email": "obi@landmark.edu"})
    assert response.json() == {"success": True}
    assert mail.sent[0]["subject"] == "Your LSMS Account Credentials"

    assert client.post("/api/lecturer/forgot-password", json={}).status_code == 400
    unknown = client.post("/api/lecturer/forgot-password", json={"signin_email": "x@landmark.edu"})
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Email not found."}

    mail.fail = True
    failed = client.post("/api/lecturer/forgot-password", json={"signin_email": "obi@landmark.edu"})
    assert failed.json() == {"success": False, "error": "Failed to send credentials email."}


def test_otp_login_flow(client, registered, mail, store):
    mail.sent.clear()
    sent = client.post("/api/lecturer/send-otp", json={"email": "Obi@landmark.edu"})
    assert sent.json() == {"success": True}
    code = store.read("otp_temp.json")["obi@landmark.edu"]["otp"]
    assert code in mail.sent[0]["text"]

    wrong = client.post("/api/lecturer/validate-otp", json={"email": "obi@landmark.edu", "otp": "0000"})
    assert wrong.status_code == 401
    assert wrong.json() == {"success": False, "error": "Incorrect OTP.", "code": "mismatch"}

    ok = client.post("/api/lecturer/validate-otp", json={"email": "obi@landmark.edu", "otp": code})
    assert ok.json() == {"success": True}

    again = client.post("/api/lecturer/validate-otp", json={"email": "obi@landmark.edu", "otp": code})
    assert again.status_code == 400
    assert again.json()["code"] == "no_challenge"


def test_otp_for_unknown_lecturer(client):
    response = client.post("/api/lecturer/send-otp", json={"email": "ghost@landmark.edu"})
    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["error"] == "Email not found in lecturer records."


def test_otp_dispatch_failure_is_soft(client, registered, mail, store):
    mail.fail = True
    response = client.post("/api/lecturer/send-otp", json={"email": "obi@landmark.edu"})
    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Failed to send OTP email."}
    assert "obi@landmark.edu" in store.read("otp_temp.json")


def test_expired_otp(client, registered, store):
    store.write("otp_temp.json", {"obi@landmark.edu": {"otp": "4321", "expires": 0}})
    response = client.post("/api/lecturer/validate-otp", json={"email": "obi@landmark.edu", "otp": "4321"})
    assert response.status_code == 401
    assert response.json()["code"] == "expired"
    assert store.read("otp_temp.json") == {"obi@landmark.edu": {"otp": "4321", "expires": 0}}


def test_admin_bootstrap(client, registered):
    assert client.get("/api/admin/exists").json() == {"exists": False}
    assert client.post("/api/admin/check-pass", json={"pass": "secret"}).json() == {"success": False}

    assert client.post("/api/admin/copy").json() == {"exists": True}
    assert client.get("/api/admin/exists").json() == {"exists": True}
    assert client.post("/api/admin/check-pass", json={"pass": "secret"}).json() == {"success": True}
    assert client.post("/api/admin/check-pass", json={"pass": "wrong"}).json() == {"success": False}

    # Later signups do not become administrators
    client.post("/api/lecturer/signup", json={"lec_name": "B", "signin_email": "b@x.y", "signin_password": "bpass"})
    client.post("/api/admin/copy")
    assert client.post("/api/admin/check-pass", json={"pass": "bpass"}).json() == {"success": False}


def test_admin_bootstrap_without_lecturers(client, store):
    client.post("/api/admin/copy")
    assert store.read("administrator.json") == []


def test_kyc_email(client, mail):
    image = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake").decode()
    response = client.post("/api/send-kyc-email", json={
        "adminEmail": "admin@landmark.edu", "userEmail": "new@landmark.edu", "image": image,
    })
    assert response.json() == {"success": True}
    message = mail.sent[0]
    assert message["to"] == "admin@landmark.edu"
    assert "new@landmark.edu" in message["text"]
    assert message["attachments"][0].filename == "lecturer_id.png"
    assert message["attachments"][0].content == b"\x89PNG fake"

    bad = client.post("/api/send-kyc-email", json={"adminEmail": "admin@landmark.edu", "image": "nope"})
    assert bad.status_code == 400
    assert bad.json() == {"success": False, "error": "Invalid image data"}


def test_kyc_email_requires_admin_email(client, mail):
    image = "data:image/png;base64," + base64.b64encode(b"png").decode()
    response = client.post("/api/send-kyc-email", json={"userEmail": "new@landmark.edu", "image": image})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Admin email required."}
    assert mail.sent == []

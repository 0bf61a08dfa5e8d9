import io

from PIL import Image

from hoteltrek.config import settings
from tests.helpers import make_image, oversized_png


def upload(client, headers, content, filename="avatar.png", content_type="image/png"):
    return client.post(
        "/api/profile/me/picture",
        headers=headers,
        files={"file": (filename, content, content_type)},
    )


def test_profile_defaults(client, fake_supabase):
    user = fake_supabase.auth.create_user("nameless@hoteltrek.io")
    headers = {"Authorization": f"Bearer {fake_supabase.auth.issue_token(user.id)}"}

    profile = client.get("/api/profile/me", headers=headers).json()
    assert profile["name"] == "Guest"
    assert profile["email"] == "nameless@hoteltrek.io"
    assert profile["phone"] == ""
    assert profile["location"] == ""
    assert profile["profile_picture"] == ""


def test_profile_edits_survive_reload(client, guest, fake_supabase):
    user, headers = guest
    response = client.put("/api/profile/me", headers=headers, json={
        "name": "Grace Hopper",
        "phone": "+1 555 0100",
        "location": "Arlington, VA",
    })
    assert response.status_code == 200

    reloaded = client.get("/api/profile/me", headers=headers).json()
    assert reloaded["name"] == "Grace Hopper"
    assert reloaded["phone"] == "+1 555 0100"
    assert reloaded["location"] == "Arlington, VA"
    assert reloaded["last_updated"] is not None

    # display name lives with the auth provider, the rest in user_profiles
    assert fake_supabase.auth.users[user.id].user_metadata["full_name"] == "Grace Hopper"
    row = fake_supabase.rows("user_profiles")[0]
    assert row["id"] == user.id
    assert row["phone"] == "+1 555 0100"


def test_partial_update_keeps_other_fields(client, guest):
    _, headers = guest
    client.put("/api/profile/me", headers=headers, json={"phone": "123", "location": "Porto"})
    client.put("/api/profile/me", headers=headers, json={"location": "Faro"})

    profile = client.get("/api/profile/me", headers=headers).json()
    assert profile["phone"] == "123"
    assert profile["location"] == "Faro"
    assert profile["name"] == "Grace Guest"


def test_email_cannot_be_changed(client, guest):
    _, headers = guest
    response = client.put("/api/profile/me", headers=headers, json={"email": "evil@hoteltrek.io"})
    assert response.status_code == 422
    assert client.get("/api/profile/me", headers=headers).json()["email"] == "guest@hoteltrek.io"


def test_auth_provider_failure_writes_nothing(client, guest, fake_supabase):
    _, headers = guest
    fake_supabase.auth.admin.fail_updates = True

    response = client.put("/api/profile/me", headers=headers, json={"name": "X", "phone": "999"})
    assert response.status_code == 502
    assert fake_supabase.rows("user_profiles") == []


def test_profile_requires_token(client):
    assert client.get("/api/profile/me").status_code in (401, 403)


def test_picture_upload_is_cropped_and_downscaled(client, guest, fake_supabase, storage):
    user, headers = guest
    response = upload(client, headers, make_image(1200, 1000))
    assert response.status_code == 200
    profile = response.json()

    assert profile["public_id"].startswith(f"{settings.profile_image_folder}/")
    assert profile["profile_picture"].startswith("/uploads/")
    assert fake_supabase.auth.users[user.id].user_metadata["avatar_url"] == profile["profile_picture"]

    served = client.get(profile["profile_picture"])
    assert served.status_code == 200
    image = Image.open(io.BytesIO(served.content))
    assert image.size == (800, 800)


def test_replacing_picture_deletes_the_old_file(client, guest, storage):
    _, headers = guest
    first = upload(client, headers, make_image(300, 300)).json()["profile_picture"]
    second = upload(client, headers, make_image(400, 400)).json()["profile_picture"]

    assert first != second
    assert client.get(first).status_code == 404
    assert client.get(second).status_code == 200


def test_picture_too_small(client, guest):
    _, headers = guest
    response = upload(client, headers, make_image(100, 150))
    assert response.status_code == 400
    assert "at least 200x200" in response.json()["detail"]


def test_picture_wrong_format(client, guest):
    _, headers = guest
    response = upload(client, headers, make_image(300, 300, fmt="BMP"), filename="a.bmp", content_type="image/bmp")
    assert response.status_code == 400
    assert "Unsupported image format" in response.json()["detail"]


def test_picture_not_an_image(client, guest):
    _, headers = guest
    response = upload(client, headers, b"definitely not pixels", filename="a.png")
    assert response.status_code == 400


def test_picture_too_large(client, guest, monkeypatch):
    _, headers = guest
    monkeypatch.setattr(settings, "profile_image_max_bytes", 100)
    response = upload(client, headers, make_image(300, 300))
    assert response.status_code == 400
    assert "larger than 100 bytes" in response.json()["detail"]


def test_picture_upload_rolls_back_when_auth_update_fails(client, guest, fake_supabase, storage):
    _, headers = guest
    folder = storage.root / settings.profile_image_folder
    before = set(folder.iterdir()) if folder.exists() else set()

    fake_supabase.auth.admin.fail_updates = True
    response = upload(client, headers, make_image(300, 300))
    assert response.status_code == 502
    after = set(folder.iterdir()) if folder.exists() else set()
    assert after == before


def test_picture_with_huge_dimensions_is_rejected(client, guest):
    _, headers = guest
    response = upload(client, headers, oversized_png(15000, 15000))
    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


def test_pasted_picture_url_clears_upload_id(client, guest):
    _, headers = guest
    uploaded = upload(client, headers, make_image(300, 300)).json()
    assert uploaded["public_id"]

    same = client.put("/api/profile/me", headers=headers, json={"profile_picture": uploaded["profile_picture"]})
    assert same.json()["public_id"] == uploaded["public_id"]

    pasted = client.put("/api/profile/me", headers=headers,
                        json={"profile_picture": "https://cdn.hoteltrek.io/avatars/grace.png"})
    assert pasted.status_code == 200
    assert pasted.json()["profile_picture"] == "https://cdn.hoteltrek.io/avatars/grace.png"
    assert pasted.json()["public_id"] is None

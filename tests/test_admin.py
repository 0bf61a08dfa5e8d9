from hoteltrek.config import settings
from tests.helpers import future, make_image

NEW_HOTEL = {
    "name": "Canal House",
    "city": "Amsterdam",
    "country": "Netherlands",
    "price_per_night": 180.0,
    "total_rooms": 8,
    "amenities": ["wifi", "breakfast"],
}


def book(client, headers, hotel_id, check_in, check_out, rooms=1):
    response = client.post("/api/booking", headers=headers, json={
        "hotel_id": hotel_id, "check_in": check_in, "check_out": check_out, "rooms": rooms,
    })
    assert response.status_code == 201
    return response.json()


def test_admin_routes_reject_guests(client, guest):
    _, headers = guest
    assert client.get("/api/admin/hotels", headers=headers).status_code == 403
    assert client.post("/api/admin/hotels", headers=headers, json=NEW_HOTEL).status_code == 403
    assert client.get("/api/admin/stats", headers=headers).status_code == 403


def test_hotel_crud(client, admin):
    _, headers = admin
    created = client.post("/api/admin/hotels", headers=headers, json=NEW_HOTEL)
    assert created.status_code == 201
    hotel = created.json()
    assert hotel["image_urls"] == []
    assert hotel["latitude"] is None

    updated = client.put(f"/api/admin/hotels/{hotel['id']}", headers=headers, json={"price_per_night": 199.5})
    assert updated.json()["price_per_night"] == 199.5
    assert updated.json()["name"] == "Canal House"

    listed = client.get("/api/admin/hotels", headers=headers, params={"city": "amster"}).json()
    assert [h["id"] for h in listed] == [hotel["id"]]

    assert client.delete(f"/api/admin/hotels/{hotel['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/admin/hotels/{hotel['id']}", headers=headers).status_code == 404


def test_invalid_hotel_is_rejected(client, admin):
    _, headers = admin
    response = client.post("/api/admin/hotels", headers=headers, json={**NEW_HOTEL, "price_per_night": 0})
    assert response.status_code == 422


def test_delete_hotel_with_upcoming_booking(client, admin, guest, hotel, fake_supabase):
    _, admin_headers = admin
    _, guest_headers = guest
    booking = book(client, guest_headers, hotel["id"], future(3), future(5))
    fake_supabase.add_row("reviews", {
        "hotel_id": hotel["id"], "user_id": "someone", "user_name": "Guest", "rating": 4,
    })

    response = client.delete(f"/api/admin/hotels/{hotel['id']}", headers=admin_headers)
    assert response.status_code == 409

    client.post(f"/api/booking/{booking['id']}/cancel", headers=guest_headers)
    assert client.delete(f"/api/admin/hotels/{hotel['id']}", headers=admin_headers).status_code == 204
    assert fake_supabase.rows("reviews") == []
    assert fake_supabase.rows("hotels") == []


def test_hotel_images(client, admin, hotel):
    _, headers = admin
    response = client.post(
        f"/api/admin/hotels/{hotel['id']}/images",
        headers=headers,
        files={"file": ("lobby.png", make_image(2000, 1000), "image/png")},
    )
    assert response.status_code == 201
    image = response.json()
    assert image["public_id"].startswith(f"{settings.hotel_image_folder}/")
    assert image["image_urls"] == [image["url"]]
    assert client.get(image["url"]).status_code == 200

    stored = client.get(f"/api/admin/hotels/{hotel['id']}", headers=headers).json()
    assert stored["image_urls"] == [image["url"]]

    missing = client.delete(f"/api/admin/hotels/{hotel['id']}/images", headers=headers,
                            params={"url": "/uploads/nope.png"})
    assert missing.status_code == 404

    removed = client.delete(f"/api/admin/hotels/{hotel['id']}/images", headers=headers,
                            params={"url": image["url"]})
    assert removed.status_code == 200
    assert removed.json()["image_urls"] == []
    assert client.get(image["url"]).status_code == 404


def test_hotel_image_must_be_an_image(client, admin, hotel):
    _, headers = admin
    response = client.post(
        f"/api/admin/hotels/{hotel['id']}/images",
        headers=headers,
        files={"file": ("notes.txt", b"plain text", "text/plain")},
    )
    assert response.status_code == 400


def test_booking_status_transitions(client, admin, guest, hotel):
    _, admin_headers = admin
    _, guest_headers = guest
    booking = book(client, guest_headers, hotel["id"], future(2), future(3))

    listed = client.get("/api/admin/bookings", headers=admin_headers, params={"status": "confirmed"}).json()
    assert [b["id"] for b in listed] == [booking["id"]]

    url = f"/api/admin/bookings/{booking['id']}/status"
    completed = client.patch(url, headers=admin_headers, json={"status": "completed"})
    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"

    assert client.patch(url, headers=admin_headers, json={"status": "cancelled"}).status_code == 400
    assert client.patch(url, headers=admin_headers, json={"status": "lost"}).status_code == 422
    assert client.patch(url, headers=guest_headers, json={"status": "completed"}).status_code == 403


def test_stats(client, admin, guest, other_guest, hotel, fake_supabase):
    _, admin_headers = admin
    _, guest_headers = guest
    _, other_headers = other_guest
    book(client, guest_headers, hotel["id"], future(2), future(4))
    cancelled = book(client, other_headers, hotel["id"], future(6), future(7))
    client.post(f"/api/booking/{cancelled['id']}/cancel", headers=other_headers)
    client.post(f"/api/hotels/{hotel['id']}/reviews", headers=guest_headers, json={"rating": 5})
    client.post(f"/api/hotels/{hotel['id']}/reviews", headers=other_headers, json={"rating": 2})

    stats = client.get("/api/admin/stats", headers=admin_headers).json()
    assert stats["hotels"] == 1
    assert stats["bookings"] == 2
    assert stats["bookings_by_status"] == {"confirmed": 1, "cancelled": 1, "completed": 0}
    assert stats["revenue"] == 240.0
    assert stats["reviews"] == 2
    assert stats["average_rating"] == 3.5


def test_hotel_update_rejects_null_for_required_fields(client, admin, hotel):
    _, headers = admin
    url = f"/api/admin/hotels/{hotel['id']}"
    assert client.put(url, headers=headers, json={"city": None}).status_code == 422
    assert client.put(url, headers=headers, json={"price_per_night": None}).status_code == 422

    # nullable columns can still be cleared
    cleared = client.put(url, headers=headers, json={"description": None})
    assert cleared.status_code == 200
    assert cleared.json()["description"] is None
    assert cleared.json()["city"] == "Lisbon"

def add_hotel(fake_supabase, name, city, latitude=None, longitude=None, price=100.0):
    return fake_supabase.add_row("hotels", {
        "name": name, "city": city, "price_per_night": price, "total_rooms": 5,
        "amenities": [], "image_urls": [], "latitude": latitude, "longitude": longitude,
    })


def test_markers_skip_hotels_without_coordinates(client, hotel, fake_supabase):
    add_hotel(fake_supabase, "Unmapped Inn", "Lisbon")
    add_hotel(fake_supabase, "Alfama Rooms", "Lisbon", 38.7114, -9.1300)

    markers = client.get("/api/admin/map/hotels").json()
    assert [m["name"] for m in markers] == ["Alfama Rooms", "Harbour View Hotel"]
    assert markers[1]["latitude"] == 38.7077
    assert markers[1]["price_per_night"] == 120.0


def test_nearby_is_sorted_and_bounded(client, hotel, fake_supabase):
    add_hotel(fake_supabase, "Alfama Rooms", "Lisbon", 38.7114, -9.1300)
    add_hotel(fake_supabase, "Porto Riverside", "Porto", 41.1406, -8.6110)

    response = client.get("/api/admin/map/nearby", params={"lat": 38.7223, "lng": -9.1393, "radius_km": 5})
    assert response.status_code == 200
    nearby = response.json()
    assert [h["name"] for h in nearby] == ["Alfama Rooms", "Harbour View Hotel"]
    assert nearby[0]["distance_km"] <= nearby[1]["distance_km"]

    wide = client.get("/api/admin/map/nearby", params={"lat": 38.7223, "lng": -9.1393, "radius_km": 400}).json()
    assert wide[-1]["name"] == "Porto Riverside"
    assert 270 < wide[-1]["distance_km"] < 280

    limited = client.get("/api/admin/map/nearby",
                         params={"lat": 38.7223, "lng": -9.1393, "radius_km": 400, "limit": 1}).json()
    assert [h["name"] for h in limited] == ["Alfama Rooms"]


def test_nearby_validates_coordinates(client):
    assert client.get("/api/admin/map/nearby", params={"lat": 91, "lng": 0}).status_code == 422
    assert client.get("/api/admin/map/nearby", params={"lat": 0, "lng": 0, "radius_km": 0}).status_code == 422
    assert client.get("/api/admin/map/nearby", params={"lat": 0}).status_code == 422


def test_admin_pins_hotel(client, admin, fake_supabase):
    _, headers = admin
    unmapped = add_hotel(fake_supabase, "Unmapped Inn", "Lisbon")

    response = client.put(f"/api/admin/map/hotels/{unmapped['id']}/location", headers=headers,
                          json={"latitude": 38.72, "longitude": -9.14})
    assert response.status_code == 200
    assert response.json()["latitude"] == 38.72

    markers = client.get("/api/admin/map/hotels").json()
    assert [m["name"] for m in markers] == ["Unmapped Inn"]


def test_pinning_requires_admin(client, guest, hotel):
    _, headers = guest
    url = f"/api/admin/map/hotels/{hotel['id']}/location"
    assert client.put(url, headers=headers, json={"latitude": 1, "longitude": 1}).status_code == 403
    assert client.put(url, json={"latitude": 1, "longitude": 1}).status_code in (401, 403)


def test_pinning_unknown_hotel(client, admin):
    _, headers = admin
    response = client.put("/api/admin/map/hotels/missing/location", headers=headers,
                          json={"latitude": 1, "longitude": 1})
    assert response.status_code == 404


def test_nearby_includes_hotels_at_the_east_edge_far_north(client, fake_supabase):
    add_hotel(fake_supabase, "Edge", "Aland", 60.307, 19.0121)

    nearby = client.get("/api/admin/map/nearby", params={"lat": 60, "lng": 10, "radius_km": 500}).json()
    assert [h["name"] for h in nearby] == ["Edge"]
    assert 499 < nearby[0]["distance_km"] < 500

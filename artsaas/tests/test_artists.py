# artsaas/tests/test_artists.py
import pytest

pytestmark = pytest.mark.asyncio

PROFILE = {
    "artistic_mediums": ["Oil painting", "Charcoal"],
    "experience_level": "intermediate",
    "artistic_statement": "Light and weather.",
    "availability_for_mentorship": True,
    "preferred_mentorship_type": "virtual",
}

ARTWORK = {"title": "Harbour at dusk", "medium": "Oil painting", "image": "harbour.jpg", "price": 300}


async def test_profile_crud(artist_auth, async_client):
    headers = artist_auth["headers"]
    r = await async_client.post("/artists", headers=headers, json=PROFILE)
    assert r.status_code == 200, r.text
    artist = r.json()
    assert artist["user_id"] == artist_auth["id"]
    assert artist["portfolio_views"] == 0

    # one profile per artist
    r_dup = await async_client.post("/artists", headers=headers, json=PROFILE)
    assert r_dup.status_code == 409

    r_me = await async_client.get("/artists/me", headers=headers)
    assert r_me.json()["_id"] == artist["_id"]

    # public view counts
    await async_client.get(f"/artists/{artist['_id']}")
    r_view = await async_client.get(f"/artists/{artist['_id']}")
    assert r_view.json()["portfolio_views"] == 1

    r_upd = await async_client.patch(
        f"/artists/{artist['_id']}", headers=headers, json={"experience_level": "advanced"}
    )
    assert r_upd.status_code == 200
    assert r_upd.json()["experience_level"] == "advanced"
    assert r_upd.json()["artistic_statement"] == "Light and weather."


async def test_profile_rules(artist_auth, guest_auth, async_client):
    r = await async_client.post("/artists", headers=guest_auth["headers"], json=PROFILE)
    assert r.status_code == 403

    artist = (await async_client.post("/artists", headers=artist_auth["headers"], json=PROFILE)).json()
    r2 = await async_client.patch(f"/artists/{artist['_id']}", headers=guest_auth["headers"], json={"skills": "x"})
    assert r2.status_code == 403

    r3 = await async_client.get("/artists/not-an-id")
    assert r3.status_code == 404


async def test_browse_filters(artist_auth, async_client):
    await async_client.post("/artists", headers=artist_auth["headers"], json=PROFILE)

    r = await async_client.get("/artists?medium=charcoal&available=true")
    assert len(r.json()) == 1
    r2 = await async_client.get("/artists?experience_level=professional")
    assert r2.json() == []
    r3 = await async_client.get("/artists?available=false")
    assert r3.json() == []


async def test_artworks(artist_auth, guest_auth, async_client):
    headers = artist_auth["headers"]
    r = await async_client.post("/artworks", headers=headers, json=ARTWORK)
    assert r.status_code == 200, r.text
    art = r.json()
    assert (art["views"], art["likes"], art["status"]) == (0, 0, "draft")

    r_feat = await async_client.post(
        "/artworks", headers=headers, json={**ARTWORK, "title": "Gulls", "is_featured": True, "status": "published"}
    )
    featured_id = r_feat.json()["_id"]

    r_list = await async_client.get(f"/artworks?artist_id={artist_auth['id']}")
    assert [a["_id"] for a in r_list.json()] == [featured_id, art["_id"]]

    r_featured = await async_client.get("/artworks/featured")
    assert [a["_id"] for a in r_featured.json()] == [featured_id]

    # only the owner edits
    r_forbidden = await async_client.patch(f"/artworks/{art['_id']}", headers=guest_auth["headers"], json={"title": "x"})
    assert r_forbidden.status_code == 403

    r_upd = await async_client.patch(f"/artworks/{art['_id']}", headers=headers, json={"status": "sold"})
    assert r_upd.json()["status"] == "sold"

    r_del = await async_client.delete(f"/artworks/{art['_id']}", headers=headers)
    assert r_del.status_code == 200
    r_gone = await async_client.patch(f"/artworks/{art['_id']}", headers=headers, json={"status": "sold"})
    assert r_gone.status_code == 404


async def test_artist_dashboard(artist_auth, async_client):
    headers = artist_auth["headers"]
    await async_client.post("/artworks", headers=headers, json=ARTWORK)
    await async_client.post("/assessments", headers=headers, json={
        "assessment_type": "gad7",
        "responses": [{"question_id": f"gad{i}", "value": 0} for i in range(1, 8)],
    })

    r = await async_client.get("/dashboard/artist", headers=headers)
    assert r.status_code == 200
    stats = r.json()["stats"]
    assert stats == {
        "artworks": 1, "views": 0, "donations": 0, "total_raised": {},
        "mentorship_requests": 0, "assessments": 1,
    }
    assert len(r.json()["recent_artworks"]) == 1


async def test_dashboard_counts_every_donation_per_currency(artist_auth, async_client):
    from datetime import datetime, timedelta, timezone
    from artsaas.db.mongo import get_db

    uid = artist_auth["id"]
    start = datetime.now(timezone.utc)
    docs = [
        {"artist_id": uid, "amount": 10.0, "currency": "USD", "status": "completed",
         "created_at": start + timedelta(seconds=i)}
        for i in range(55)
    ]
    docs += [
        {"artist_id": uid, "amount": 12.5, "currency": "EUR", "status": "completed", "created_at": start},
        {"artist_id": uid, "amount": 7.25, "currency": "EUR", "status": "completed", "created_at": start},
        {"artist_id": uid, "amount": 99.0, "currency": "USD", "status": "pending", "created_at": start},
        {"artist_id": "someone-else", "amount": 5.0, "currency": "USD", "status": "completed", "created_at": start},
    ]
    get_db()["donations"].insert_many(docs)

    r = await async_client.get("/dashboard/artist", headers=artist_auth["headers"])
    assert r.status_code == 200
    stats = r.json()["stats"]
    assert stats["donations"] == 57
    assert stats["total_raised"] == {"USD": 550.0, "EUR": 19.75}
    assert len(r.json()["recent_donations"]) == 3

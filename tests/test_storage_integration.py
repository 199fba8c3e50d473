"""
End-to-end checks against a real PostgreSQL database. Each test starts from
a freshly initialised schema; see the ``db`` fixture in conftest.
"""

from datetime import date

import pytest

from common.exceptions import ValidationFailure
import feed.feed_dao as feed_dao
import films.films_dao as films_dao
from users.user import User
import users.users_dao as users_dao

pytestmark = pytest.mark.usefixtures("db")

PG = 2
THRILLER = 4
DRAMA = 2


def film_body(**overrides):
    body = {
        "name": "Jaws",
        "description": "Shark movie",
        "releaseDate": "1975-06-20",
        "duration": 124,
        "mpa": {"id": PG},
    }
    body.update(overrides)
    return body


def create_film(client, **overrides):
    response = client.post("/films", json=film_body(**overrides))
    assert response.status_code == 201, response.json
    return response.json


def create_user(client, login):
    response = client.post(
        "/users",
        json={"email": f"{login}@amity.gov", "login": login, "birthday": "1950-01-01"},
    )
    assert response.status_code == 201, response.json
    return response.json


def create_director(client, name):
    response = client.post("/directors", json={"name": name})
    assert response.status_code == 201, response.json
    return response.json


def test_jaws(client):
    jaws = create_film(client)
    u1 = create_user(client, "brody")
    u2 = create_user(client, "hooper")

    client.put(f"/films/{jaws['id']}/like/{u1['id']}")
    client.put(f"/films/{jaws['id']}/like/{u2['id']}")

    popular = client.get("/films/popular?count=1").json
    common = client.get(f"/films/common?userId={u1['id']}&friendId={u2['id']}").json

    assert [f["name"] for f in popular] == ["Jaws"]
    assert [f["name"] for f in common] == ["Jaws"]
    assert popular[0]["mpa"] == {"id": PG, "name": "PG"}


def test_genres_and_directors_round_trip(client):
    spielberg = create_director(client, "Steven Spielberg")
    created = create_film(
        client,
        genres=[{"id": THRILLER}, {"id": DRAMA}, {"id": THRILLER}],
        directors=[{"id": spielberg["id"]}],
    )

    fetched = client.get(f"/films/{created['id']}").json

    assert {g["id"] for g in fetched["genres"]} == {THRILLER, DRAMA}
    assert fetched["directors"] == [spielberg]


def test_update_keeps_description_and_clears_genres(client):
    created = create_film(client, genres=[{"id": THRILLER}])

    response = client.put(
        "/films",
        json={"id": created["id"], "name": "Jaws 2", "description": None, "genres": []},
    )

    assert response.status_code == 200
    assert response.json["name"] == "Jaws 2"
    assert response.json["description"] == "Shark movie"
    assert response.json["genres"] == []


def test_create_with_unknown_genre_leaves_nothing_behind(client):
    response = client.post("/films", json=film_body(genres=[{"id": 999}]))

    assert response.status_code == 404
    assert client.get("/films").json == []


def test_double_like_is_stored_once(client):
    jaws = create_film(client)
    brody = create_user(client, "brody")

    client.put(f"/films/{jaws['id']}/like/{brody['id']}")
    client.put(f"/films/{jaws['id']}/like/{brody['id']}")

    assert client.get(f"/films/{jaws['id']}").json["likes"] == [brody["id"]]
    events = feed_dao.get_events(brody["id"])
    assert [(e.event_type.value, e.operation.value) for e in events] == [
        ("LIKE", "ADD")
    ]


def test_popular_films_order_by_likes(client):
    users = [create_user(client, f"user{i}") for i in range(3)]
    unloved = create_film(client, name="Orca")
    liked_once = create_film(client, name="Jaws 2")
    liked_most = create_film(client, name="Jaws")

    for user in users:
        client.put(f"/films/{liked_most['id']}/like/{user['id']}")
    client.put(f"/films/{liked_once['id']}/like/{users[0]['id']}")

    popular = client.get("/films/popular?count=10").json

    assert [f["id"] for f in popular] == [
        liked_most["id"],
        liked_once["id"],
        unloved["id"],
    ]
    counts = [len(f["likes"]) for f in popular]
    assert counts == sorted(counts, reverse=True)


def test_popular_films_filter_by_genre_and_year(client):
    create_film(client, name="Jaws", genres=[{"id": THRILLER}])
    create_film(client, name="Jaws 2", releaseDate="1978-06-16", genres=[{"id": THRILLER}])
    create_film(client, name="Annie Hall", releaseDate="1977-04-20", genres=[{"id": 1}])

    thrillers = client.get(f"/films/popular?genreId={THRILLER}&year=1978").json

    assert [f["name"] for f in thrillers] == ["Jaws 2"]


def test_common_films_are_symmetric(client):
    a = create_user(client, "brody")
    b = create_user(client, "hooper")
    films = [create_film(client, name=f"Jaws {i}") for i in range(3)]
    for film in films[:2]:
        client.put(f"/films/{film['id']}/like/{a['id']}")
    for film in films[1:]:
        client.put(f"/films/{film['id']}/like/{b['id']}")

    ab = client.get(f"/films/common?userId={a['id']}&friendId={b['id']}").json
    ba = client.get(f"/films/common?userId={b['id']}&friendId={a['id']}").json

    assert {f["id"] for f in ab} == {f["id"] for f in ba} == {films[1]["id"]}


def test_deleted_film_disappears_from_listings(client):
    spielberg = create_director(client, "Steven Spielberg")
    jaws = create_film(client, directors=[{"id": spielberg["id"]}])

    assert client.delete(f"/films/{jaws['id']}").status_code == 200

    assert client.get("/films").json == []
    assert client.get(f"/films/director/{spielberg['id']}").json == []
    assert films_dao.getFilm(jaws["id"]) is None


def test_director_films_sorted_by_year(client):
    spielberg = create_director(client, "Steven Spielberg")
    directors = [{"id": spielberg["id"]}]
    create_film(client, name="Jurassic Park", releaseDate="1993-06-11", directors=directors)
    create_film(client, name="Jaws", directors=directors)

    by_year = client.get(f"/films/director/{spielberg['id']}?sortBy=year").json
    bad_sort = client.get(f"/films/director/{spielberg['id']}?sortBy=rating")

    assert [f["name"] for f in by_year] == ["Jaws", "Jurassic Park"]
    assert bad_sort.status_code == 404


def test_search_by_title_and_director(client):
    spielberg = create_director(client, "Steven Spielberg")
    create_film(client, name="Jaws", directors=[{"id": spielberg["id"]}])
    create_film(client, name="Spielberg Stories")
    create_film(client, name="Orca")

    by_title = client.get("/films/search?query=JAW&by=title").json
    by_both = client.get("/films/search?query=spielberg&by=director,title").json

    assert [f["name"] for f in by_title] == ["Jaws"]
    assert {f["name"] for f in by_both} == {"Jaws", "Spielberg Stories"}


def test_friendship_is_one_way_until_confirmed(client):
    brody = create_user(client, "brody")
    hooper = create_user(client, "hooper")
    quint = create_user(client, "quint")

    client.put(f"/users/{brody['id']}/friends/{quint['id']}")
    client.put(f"/users/{hooper['id']}/friends/{quint['id']}")

    assert [u["id"] for u in client.get(f"/users/{brody['id']}/friends").json] == [
        quint["id"]
    ]
    assert client.get(f"/users/{quint['id']}/friends").json == []
    common = client.get(f"/users/{brody['id']}/friends/common/{hooper['id']}").json
    assert [u["login"] for u in common] == ["quint"]


def test_duplicate_email_is_rejected(client):
    create_user(client, "brody")

    response = client.post(
        "/users",
        json={"email": "BRODY@amity.gov", "login": "martin", "birthday": "1950-01-01"},
    )

    assert response.status_code == 400
    assert "email" in response.json["errors"]


def test_recommendations_come_from_similar_users(client):
    brody = create_user(client, "brody")
    hooper = create_user(client, "hooper")
    jaws = create_film(client, name="Jaws")
    orca = create_film(client, name="Orca")

    client.put(f"/films/{jaws['id']}/like/{brody['id']}")
    client.put(f"/films/{jaws['id']}/like/{hooper['id']}")
    client.put(f"/films/{orca['id']}/like/{hooper['id']}")

    recommended = client.get(f"/users/{brody['id']}/recommendations").json

    assert [f["name"] for f in recommended] == ["Orca"]


def test_review_usefulness(client):
    brody = create_user(client, "brody")
    hooper = create_user(client, "hooper")
    jaws = create_film(client)

    review = client.post(
        "/reviews",
        json={
            "content": "Needs a bigger boat.",
            "isPositive": True,
            "userId": brody["id"],
            "filmId": jaws["id"],
        },
    ).json
    client.put(f"/reviews/{review['reviewId']}/like/{hooper['id']}")
    client.put(f"/reviews/{review['reviewId']}/dislike/{brody['id']}")
    client.put(f"/reviews/{review['reviewId']}/like/{brody['id']}")

    stored = client.get(f"/reviews/{review['reviewId']}").json
    listed = client.get(f"/reviews?filmId={jaws['id']}").json

    assert stored["useful"] == 2
    assert [r["reviewId"] for r in listed] == [review["reviewId"]]
    events = client.get(f"/users/{brody['id']}/feed").json
    assert [(e["eventType"], e["operation"]) for e in events] == [("REVIEW", "ADD")]


def test_director_films_sorted_by_likes_ascending(client):
    spielberg = create_director(client, "Steven Spielberg")
    directors = [{"id": spielberg["id"]}]
    jaws = create_film(client, name="Jaws", directors=directors)
    hook = create_film(client, name="Hook", releaseDate="1991-12-11", directors=directors)
    brody = create_user(client, "brody")
    hooper = create_user(client, "hooper")

    client.put(f"/films/{jaws['id']}/like/{brody['id']}")
    client.put(f"/films/{jaws['id']}/like/{hooper['id']}")
    client.put(f"/films/{hook['id']}/like/{brody['id']}")

    by_likes = client.get(f"/films/director/{spielberg['id']}?sortBy=likes").json

    assert [f["name"] for f in by_likes] == ["Hook", "Jaws"]


def test_recommendations_ranked_by_similar_users_then_popularity(client):
    brody = create_user(client, "brody")
    hooper = create_user(client, "hooper")
    quint = create_user(client, "quint")
    vaughn = create_user(client, "vaughn")
    jaws = create_film(client, name="Jaws")
    orca = create_film(client, name="Orca")
    piranha = create_film(client, name="Piranha")
    jaws_2 = create_film(client, name="Jaws 2")

    for user in (brody, hooper, quint):
        client.put(f"/films/{jaws['id']}/like/{user['id']}")
    # two similar users back Jaws 2, one backs each of Orca and Piranha
    client.put(f"/films/{jaws_2['id']}/like/{hooper['id']}")
    client.put(f"/films/{jaws_2['id']}/like/{quint['id']}")
    client.put(f"/films/{orca['id']}/like/{hooper['id']}")
    client.put(f"/films/{piranha['id']}/like/{quint['id']}")
    # vaughn shares no likes with brody but makes Piranha more popular
    client.put(f"/films/{piranha['id']}/like/{vaughn['id']}")

    recommended = client.get(f"/users/{brody['id']}/recommendations").json

    assert [f["name"] for f in recommended] == ["Jaws 2", "Piranha", "Orca"]


def test_common_films_with_yourself_are_rejected(client):
    brody = create_user(client, "brody")

    response = client.get(f"/films/common?userId={brody['id']}&friendId={brody['id']}")

    assert response.status_code == 400


def test_email_differing_only_in_case_is_rejected_by_storage(client):
    brody = create_user(client, "brody")
    duplicate = User(
        id=None,
        email="Brody@Amity.gov",
        login="martin",
        name="Martin",
        birthday=date(1950, 1, 1),
    )

    with pytest.raises(ValidationFailure) as exc:
        users_dao.createUser(duplicate)

    assert exc.value.errors == {"email": [users_dao.EMAIL_IN_USE]}
    assert [u.id for u in users_dao.getUsers()] == [brody["id"]]

"""
HTTP surface tests: routers wired to a fresh SQLite file per test.
"""
import httpx
import pytest

from aura import app
from aura.db.sqlite import init_sqlite


@pytest.fixture
async def client(tmp_path):
    await init_sqlite(tmp_path)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _deck(client, name="Verbs"):
    res = await client.post("/decks/", json={"name": name})
    assert res.status_code == 201
    return res.json()


async def _card(client, term, definition, deck_ids=(), context=None):
    res = await client.post(
        "/flashcards/",
        json={"term": term, "definition": definition, "context": context, "deck_ids": list(deck_ids)},
    )
    assert res.status_code == 201
    return res.json()


async def test_health(client):
    res = await client.get("/health")

    assert res.json() == {"status": "ok"}


class TestFlashcardsAndDecks:
    async def test_create_card_with_default_schedule(self, client):
        card = await _card(client, "run", "to move fast")

        assert card["repetitions"] == 0
        assert card["interval"] == 1
        assert card["ease_factor"] == 2.5
        assert card["last_reviewed_at"] is None
        assert card["next_review_at"] is None

    async def test_deck_membership(self, client):
        deck = await _deck(client)
        card = await _card(client, "run", "to move fast", deck_ids=[deck["id"]])
        other = await _card(client, "walk", "to move slowly")

        res = await client.get(f"/decks/{deck['id']}/cards")
        assert [c["id"] for c in res.json()["items"]] == [card["id"]]

        res = await client.put(f"/decks/{deck['id']}/cards/{other['id']}")
        assert res.status_code == 204
        res = await client.get(f"/decks/{deck['id']}")
        assert res.json()["card_count"] == 2

    async def test_global_deck_is_virtual(self, client):
        await _card(client, "run", "to move fast")

        res = await client.get("/decks/global-all-cards")

        assert res.status_code == 200
        assert res.json()["card_count"] == 1

    async def test_edit_content_keeps_schedule(self, client):
        card = await _card(client, "run", "to move fast")
        await client.post(f"/review/{card['id']}", json={"quality": 5})

        res = await client.patch(f"/flashcards/{card['id']}", json={"definition": "to sprint"})

        body = res.json()
        assert body["definition"] == "to sprint"
        assert body["repetitions"] == 1

    async def test_search(self, client):
        await _card(client, "run", "to move fast")
        await _card(client, "walk", "to move slowly")

        res = await client.get("/flashcards/search", params={"q": "slow"})

        assert [c["term"] for c in res.json()["items"]] == ["walk"]

    async def test_create_card_in_unknown_deck_is_404(self, client):
        res = await client.post(
            "/flashcards/",
            json={"term": "run", "definition": "to move fast", "deck_ids": ["nope"]},
        )

        assert res.status_code == 404
        res = await client.get("/flashcards/search", params={"q": "run"})
        assert res.json()["total"] == 0

    async def test_missing_card_is_404(self, client):
        assert (await client.get("/flashcards/nope")).status_code == 404
        assert (await client.delete("/flashcards/nope")).status_code == 404


class TestReview:
    async def test_review_runs_sm2(self, client):
        card = await _card(client, "run", "to move fast")

        res = await client.post(f"/review/{card['id']}", json={"quality": 5, "source": "flashcard"})

        assert res.status_code == 200
        body = res.json()
        assert body["repetitions"] == 1
        assert body["ease_factor"] == 2.6
        assert body["next_review_at"] - body["last_reviewed_at"] == 86_400_000

    async def test_invalid_quality_is_422(self, client):
        card = await _card(client, "run", "to move fast")

        res = await client.post(f"/review/{card['id']}", json={"quality": 4})

        assert res.status_code == 422

    async def test_unknown_card_is_404(self, client):
        res = await client.post("/review/nope", json={"quality": 3})

        assert res.status_code == 404

    async def test_reviewed_card_leaves_due_queue(self, client):
        first = await _card(client, "run", "to move fast")
        await _card(client, "walk", "to move slowly")
        await client.post(f"/review/{first['id']}", json={"quality": 5})

        res = await client.get("/review/due")

        assert [c["term"] for c in res.json()["items"]] == ["walk"]
        res = await client.get("/review/all")
        assert [c["term"] for c in res.json()["items"]] == ["walk", "run"]


class TestQuizChallengeHints:
    async def test_generate_and_answer(self, client):
        for i in range(5):
            await _card(client, f"word{i}", f"meaning {i}")

        res = await client.post("/quiz/generate", json={"deck_id": "global-all-cards", "count": 3})
        questions = res.json()["questions"]

        assert [q["type"] for q in questions] == [
            "multiple_choice",
            "fill_in_the_blank",
            "multiple_choice",
        ]
        mcq = questions[0]
        assert len(mcq["options"]) == 4

        res = await client.post(
            "/quiz/answer",
            json={"question": mcq, "user_answer": mcq["correct_answer"], "elapsed_ms": 500},
        )
        assert res.json()["is_correct"] is True
        assert res.json()["quality"] == 5

        card = (await client.get(f"/flashcards/{mcq['flashcard']['id']}")).json()
        assert card["repetitions"] == 1

    async def test_answer_is_graded_against_stored_card(self, client):
        for i in range(4):
            await _card(client, f"word{i}", f"meaning {i}")
        res = await client.post("/quiz/generate", json={"deck_id": "global-all-cards", "count": 1})
        mcq = res.json()["questions"][0]
        tampered = {**mcq, "correct_answer": "anything", "options": ["anything"]}

        res = await client.post(
            "/quiz/answer",
            json={"question": tampered, "user_answer": "anything", "elapsed_ms": 500},
        )

        body = res.json()
        assert body["is_correct"] is False
        assert body["quality"] == 1
        assert body["correct_answer"] == mcq["flashcard"]["definition"]

    async def test_answer_for_unknown_card_is_404(self, client):
        card = await _card(client, "run", "to move fast")
        res = await client.post("/quiz/generate", json={"deck_id": "global-all-cards", "count": 1})
        question = res.json()["questions"][0]
        await client.delete(f"/flashcards/{card['id']}")

        res = await client.post(
            "/quiz/answer",
            json={"question": question, "user_answer": "to move fast"},
        )

        assert res.status_code == 404

    async def test_challenge_respects_limit(self, client):
        for i in range(12):
            await _card(client, f"word{i}", f"meaning {i}")

        res = await client.post("/challenge/", json={"deck_id": "global-all-cards", "card_limit": 5})

        ids = [c["id"] for c in res.json()["items"]]
        assert len(ids) == 5
        assert len(set(ids)) == 5

    async def test_hint_progression(self, client):
        card = await _card(client, "run", "to move fast", context="I run every day.")

        res = await client.post("/hints/next", json={"flashcard_id": card["id"], "used": []})
        assert res.json() == {"type": "first_letter", "content": 'The word starts with "R"'}

        used = ["first_letter", "word_length", "context_sentence"]
        res = await client.post("/hints/next", json={"flashcard_id": card["id"], "used": used})
        assert res.json() is None

    async def test_penalty(self, client):
        res = await client.post("/hints/penalty", json={"base_quality": 5, "hints_used": 2})

        assert res.json() == {"quality": 3}


class TestStatistics:
    async def test_all_statistics(self, client):
        deck = await _deck(client, "Verbs")
        await _deck(client, "Adjectives")
        card = await _card(client, "run", "to move fast", deck_ids=[deck["id"]])
        await _card(client, "walk", "to move slowly", deck_ids=[deck["id"]])
        await client.post(f"/review/{card['id']}", json={"quality": 5})

        res = await client.get("/statistics/", params={"sort": "name_asc"})
        body = res.json()

        assert body["global"]["counts"]["total"] == 2
        assert body["global"]["counts"]["learning"] == 1
        assert body["global"]["progress"] == 25
        assert [d["deck"]["name"] for d in body["decks"]] == ["Adjectives", "Verbs"]

    async def test_unknown_deck_is_404(self, client):
        res = await client.get("/statistics/decks/nope")

        assert res.status_code == 404

"""API endpoint tests."""

FOOD_HISTORY = [
    {
        "id": "f1",
        "eaten_date": "2025-01-01",
        "raw_input": "chicken breast",
        "food_items": [{"description": "chicken breast", "calories": 300}],
    },
    {
        "id": "f2",
        "eaten_date": "2025-01-02",
        "food_items": [{"name": "chicken breast", "calories": 310}],
    },
]

WORKOUT = [
    {"exercise_key": "bench_press", "sets": 4, "reps": 10, "weight_lbs": 135},
    {"exercise_key": "lat_pulldown", "sets": 3, "reps": 12, "weight_lbs": 100},
]

WORKOUT_HISTORY = [
    {"entry_id": "w1", "logged_date": "2025-01-01", "exercise_keys": ["bench_press", "lat_pulldown"]},
    {"entry_id": "w2", "logged_date": "2025-01-03", "exercise_keys": ["lat_pulldown", "bench_press"]},
]

SAVED_ROUTINE = {
    "id": "r1",
    "name": "Upper Body",
    "use_count": 4,
    "last_used_at": "2025-01-03T18:00:00Z",
    "exercise_sets": [
        {"exercise_key": "bench_press", "sets": 3, "reps": 10, "weight_lbs": 100},
        {"exercise_key": "lat_pulldown", "sets": 3, "reps": 12, "weight_lbs": 100},
    ],
}


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_normalize_text(client):
    """Test the normalization endpoint."""
    response = client.post("/api/v1/text/normalize", json={"text": "2 Chicken Breasts w/ Rice"})
    assert response.status_code == 200
    data = response.json()
    assert data["signature"] == "breasts chicken rice"
    assert data["candidate_words"] == ["chicken", "breasts", "rice"]


def test_similarity(client):
    """Test the Jaccard similarity endpoint."""
    response = client.post(
        "/api/v1/text/similarity", json={"a": "2 eggs and toast", "b": "toast with eggs"}
    )
    assert response.status_code == 200
    assert response.json()["jaccard"] == 1.0


def test_text_too_long(client):
    """Test that oversized input is rejected."""
    response = client.post("/api/v1/text/normalize", json={"text": "x" * 2001})
    assert response.status_code == 422


def test_detect_history_reference(client):
    """Test reference detection with the tier threshold."""
    response = client.post("/api/v1/history/reference", json={"text": "leftover pizza"})
    assert response.status_code == 200
    data = response.json()
    assert data["has_reference"] is True
    assert data["confidence"] == "high"
    assert data["matched_patterns"] == ["leftover"]
    assert data["min_similarity"] == 0.35


def test_detect_no_history_reference(client):
    """Test plain food text."""
    data = client.post("/api/v1/history/reference", json={"text": "grilled salmon"}).json()
    assert data["has_reference"] is False
    assert data["confidence"] == "low"
    assert data["matched_patterns"] == []


def test_match_history_reference(client):
    """Test resolving a reference to a past entry."""
    response = client.post(
        "/api/v1/history/match",
        json={"text": "the chicken breast from yesterday", "recent_entries": FOOD_HISTORY},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["reference"]["confidence"] == "high"
    assert data["match"]["entry"]["id"] == "f2"


def test_match_without_reference(client):
    """Test that plain text is not matched against history."""
    data = client.post(
        "/api/v1/history/match", json={"text": "chicken breast", "recent_entries": FOOD_HISTORY}
    ).json()
    assert data["reference"]["has_reference"] is False
    assert data["match"] is None


def test_food_suggestion_and_dismissal_flow(client):
    """Test suggesting, dismissing and suppressing a food save prompt."""
    payload = {
        "new_items": [{"description": "chicken breast", "calories": 305}],
        "recent_entries": FOOD_HISTORY,
    }
    response = client.post("/api/v1/suggestions/food", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["suggest"] is True
    assert data["reason"] == "suggest"
    assert data["suggestion"]["match_count"] == 3
    assert data["suggestion"]["matched_entry_ids"] == ["f1", "f2"]
    signature_hash = data["suggestion"]["signature_hash"]

    response = client.post("/api/v1/dismissals", json={"signature_hash": signature_hash})
    assert response.status_code == 201
    assert response.json() == {"count": 1, "show_opt_out_link": False}

    response = client.get(f"/api/v1/dismissals/{signature_hash}")
    assert response.json()["dismissed"] is True

    data = client.post("/api/v1/suggestions/food", json=payload).json()
    assert data["suggest"] is False
    assert data["reason"] == "dismissed"
    assert "suggestion" not in data


def test_food_suggestion_from_saved_meal(client):
    """Test that saved-meal entries are never suggested."""
    data = client.post(
        "/api/v1/suggestions/food",
        json={
            "new_items": [{"description": "chicken breast", "calories": 300}],
            "recent_entries": FOOD_HISTORY,
            "from_saved_meal": True,
        },
    ).json()
    assert data["suggest"] is False
    assert data["reason"] == "from_template"


def test_exercise_suggestion_with_matching_routine(client):
    """Test a workout suggestion that points at a saved routine."""
    response = client.post(
        "/api/v1/suggestions/exercise",
        json={
            "new_exercises": WORKOUT,
            "recent_entries": WORKOUT_HISTORY,
            "saved_routines": [SAVED_ROUTINE],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["suggest"] is True
    assert data["suggestion"]["match_count"] == 3
    assert data["matching_routine"]["id"] == "r1"
    assert data["matching_routine"]["diffs"] == [
        {"index": 0, "exercise_key": "bench_press", "sets": 1, "weight_lbs": 35.0},
        {"index": 1, "exercise_key": "lat_pulldown"},
    ]


def test_match_saved_routine(client):
    """Test the routine matching endpoint."""
    response = client.post(
        "/api/v1/routines/match",
        json={"new_exercises": WORKOUT, "saved_routines": [SAVED_ROUTINE]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Upper Body"
    assert data["similarity"] == 1.0


def test_match_saved_routine_none(client):
    """Test that an unrelated workout matches nothing."""
    response = client.post(
        "/api/v1/routines/match",
        json={
            "new_exercises": [{"exercise_key": "squat", "sets": 5, "reps": 5, "weight_lbs": 225}],
            "saved_routines": [SAVED_ROUTINE],
        },
    )
    assert response.status_code == 200
    assert response.json() is None


def test_dismissal_status_and_opt_out(client):
    """Test that the opt-out link appears after three dismissals."""
    assert client.get("/api/v1/dismissals").json() == {"count": 0, "show_opt_out_link": False}

    for signature_hash in ("a", "b", "c"):
        client.post("/api/v1/dismissals", json={"signature_hash": signature_hash})

    assert client.get("/api/v1/dismissals").json() == {"count": 3, "show_opt_out_link": True}


def test_dismissal_requires_hash(client):
    """Test validation of the dismissal payload."""
    response = client.post("/api/v1/dismissals", json={"signature_hash": ""})
    assert response.status_code == 422


def test_dismissals_cannot_be_cleared(client):
    """Test that the dismissal record has no delete route."""
    client.post("/api/v1/dismissals", json={"signature_hash": "abc"})
    response = client.delete("/api/v1/dismissals")
    assert response.status_code == 405
    assert client.get("/api/v1/dismissals/abc").json()["dismissed"] is True
    assert client.get("/api/v1/dismissals").json()["count"] == 1

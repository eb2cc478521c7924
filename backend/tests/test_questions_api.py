import httpx
import openai


def test_questions_extracts_array_from_prose(make_client):
    client = make_client(
        content='Here you go: [{"question":"Q1","correctAnswer":"A","incorrectAnswers":["B","C","D"]}] Thanks.'
    )

    r = client.post("/api/questions", json={"topic": "geografía"})

    assert r.status_code == 200
    assert r.json() == {
        "questions": [
            {"question": "Q1", "correctAnswer": "A", "incorrectAnswers": ["B", "C", "D"]}
        ]
    }


def test_questions_without_array_returns_empty_list(make_client):
    client = make_client(content="No tengo preguntas para ese tema.")

    r = client.post("/api/questions", json={"topic": "geografía"})

    assert r.status_code == 200
    assert r.json() == {"questions": []}


def test_questions_with_broken_json_returns_empty_list(make_client):
    client = make_client(content='[{"question": "Q1", }')

    r = client.post("/api/questions", json={"topic": "geografía"})

    assert r.status_code == 200
    assert r.json() == {"questions": []}


def test_questions_missing_topic_is_400(make_client):
    client = make_client()

    r = client.post("/api/questions", json={})

    assert r.status_code == 400
    assert r.json() == {"error": "Por favor, proporciona un tema."}
    assert client.openai.completions.calls == []


def test_questions_empty_topic_is_400(make_client):
    r = make_client().post("/api/questions", json={"topic": ""})
    assert r.status_code == 400


def test_questions_upstream_failure_is_generic_500(make_client):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    client = make_client(error=openai.APIConnectionError(request=request))

    r = client.post("/api/questions", json={"topic": "geografía"})

    assert r.status_code == 500
    assert r.json() == {"error": "Hubo un problema al generar las preguntas."}


def test_questions_auth_failure_does_not_leak_details(make_client):
    client = make_client(error=RuntimeError("Incorrect API key provided: sk-test"))

    r = client.post("/api/questions", json={"topic": "geografía"})

    assert r.status_code == 500
    assert "sk-test" not in r.text


def test_questions_wrong_body_type_is_422(make_client):
    r = make_client().post("/api/questions", json={"topic": ["a", "b"]})

    assert r.status_code == 422
    assert r.json()["error"] == "Solicitud no válida."


def test_questions_without_body_is_400(make_client):
    client = make_client()

    r = client.post("/api/questions")

    assert r.status_code == 400
    assert r.json() == {"error": "Por favor, proporciona un tema."}
    assert client.openai.completions.calls == []


def test_questions_numeric_topic_is_used_as_text(make_client):
    client = make_client(content='[{"question":"Q1"}]')

    r = client.post("/api/questions", json={"topic": 1914})

    assert r.status_code == 200
    assert r.json() == {"questions": [{"question": "Q1"}]}
    (call,) = client.openai.completions.calls
    assert '"1914"' in call["messages"][0]["content"]

from saathi.services.chat_service import NOT_FOUND_ANSWER, extractive_answer

from factories import SAMPLE_TEXT


def test_chat_local_reply(test_client):
    r = test_client.post("/v1/chat", json={"prompt": "Explain Newton's second law of motion"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert isinstance(data["message"], str) and len(data["message"]) > 0
    assert "Newton's second law" in data["message"]

def test_chat_short_prompt_asks_for_details(test_client):
    r = test_client.post("/v1/chat", json={"prompt": "hi"})
    assert r.status_code == 200
    assert "more detail" in r.json()["message"]

def test_chat_empty_prompt_rejected(test_client):
    r = test_client.post("/v1/chat", json={"prompt": ""})
    assert r.status_code == 422

def test_chat_uses_llm(test_client, fake_llm):
    fake_llm.reply = "F = m * a"
    r = test_client.post("/v1/chat", json={"prompt": "Newton's second law?"})
    assert r.status_code == 200
    assert r.json() == {"message": "F = m * a"}
    assert fake_llm.prompts == ["Newton's second law?"]

def test_chat_llm_failure(test_client, fake_llm):
    fake_llm.fail = True
    r = test_client.post("/v1/chat", json={"prompt": "Newton's second law?"})
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to generate content"


def test_document_chat_extractive_answer(test_client):
    body = {"message": "Where is the energy stored?", "documentText": SAMPLE_TEXT}
    r = test_client.post("/v1/document-chat", json=body)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["status"] == "success"
    assert "glucose" in data["response"]

def test_document_chat_unknown_information(test_client):
    body = {"message": "Who won the football cup?", "documentText": SAMPLE_TEXT}
    r = test_client.post("/v1/document-chat", json=body)
    assert r.status_code == 200
    assert r.json()["response"].startswith(NOT_FOUND_ANSWER)

def test_document_chat_requires_document(test_client):
    r = test_client.post("/v1/document-chat", json={"message": "What is it about?", "documentText": ""})
    assert r.status_code == 422

def test_document_chat_prompt_is_grounded(test_client, fake_llm):
    fake_llm.reply = "In glucose molecules."
    body = {"message": "Where is the energy stored?", "documentText": SAMPLE_TEXT}
    r = test_client.post("/v1/document-chat", json=body)
    assert r.status_code == 200
    assert r.json()["response"] == "In glucose molecules."

    prompt = fake_llm.prompts[0]
    assert prompt.startswith("Context: " + SAMPLE_TEXT)
    assert "Question: Where is the energy stored?" in prompt
    assert NOT_FOUND_ANSWER in prompt

def test_document_chat_context_is_truncated(test_client, fake_llm):
    long_text = "a" * 20000
    r = test_client.post("/v1/document-chat", json={"message": "What?", "documentText": long_text})
    assert r.status_code == 200
    assert "a" * 15000 in fake_llm.prompts[0]
    assert "a" * 15001 not in fake_llm.prompts[0]

def test_document_chat_llm_failure(test_client, fake_llm):
    fake_llm.fail = True
    r = test_client.post("/v1/document-chat", json={"message": "What?", "documentText": SAMPLE_TEXT})
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to get response"


def test_extractive_answer_keeps_document_order():
    answer = extractive_answer(SAMPLE_TEXT, "What does chlorophyll do with sunlight and glucose?")
    assert answer.index("chlorophyll") < answer.index("glucose")

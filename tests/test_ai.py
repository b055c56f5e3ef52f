import pytest

from app.models.enums import OpportunityStage
from app.models.opportunity import Opportunity
from app.services import ai_service
from app.services.ai_service import extract_json

from conftest import auth_headers, make_lead


class FakeLLM:
    reply = "ok"
    prompts = []

    def complete(self, prompt, **kwargs):
        FakeLLM.prompts.append(prompt)
        if isinstance(FakeLLM.reply, Exception):
            raise FakeLLM.reply
        return FakeLLM.reply


@pytest.fixture(autouse=True)
def fake_llm(monkeypatch):
    FakeLLM.reply = "ok"
    FakeLLM.prompts = []
    monkeypatch.setattr(ai_service, "LLMService", FakeLLM)
    return FakeLLM


def ask(client, user, action, **params):
    return client.post("/ai", json={"action": action, "params": params}, headers=auth_headers(user))


class TestExtractJson:

    def test_json_inside_prose(self):
        text = 'Sure! Here you go:\n```json\n{"score": 82, "reasoning": "warm"}\n```'
        assert extract_json(text, {})["score"] == 82

    def test_fallback_when_missing_or_broken(self):
        assert extract_json("no json here", {"x": 1}) == {"x": 1}
        assert extract_json("{not: valid}", {"x": 1}) == {"x": 1}


class TestActions:

    def test_unknown_action_is_400(self, client, rep):
        r = ask(client, rep, "write-poem")
        assert r.status_code == 400
        assert r.json() == {"error": "Unknown action"}

    def test_generate_email_uses_sender_name(self, client, rep, fake_llm):
        fake_llm.reply = "Subject: Hello"
        r = ask(client, rep, "generate-email", recipientName="Pat", context="intro", tone="formal")
        assert r.json() == {"result": "Subject: Hello"}
        assert "Sender: Rita Rep" in fake_llm.prompts[0]

    def test_score_lead_parses_json(self, client, rep, fake_llm):
        fake_llm.reply = 'Result: {"score": 77, "reasoning": "budget", "nextSteps": ["call"]}'
        r = ask(client, rep, "score-lead", firstName="Jane", lastName="Doe")
        assert r.json()["result"]["score"] == 77

    def test_score_lead_fallback(self, client, rep, fake_llm):
        fake_llm.reply = "I cannot score this."
        r = ask(client, rep, "score-lead", firstName="Jane", lastName="Doe")
        assert r.json()["result"] == {
            "score": 50, "reasoning": "Unable to analyze", "nextSteps": ["Follow up with lead"],
        }

    def test_summarize_requires_notes(self, client, rep):
        assert ask(client, rep, "summarize-meeting").status_code == 400

    def test_summarize_fallback_truncates_notes(self, client, rep, fake_llm):
        fake_llm.reply = "nothing structured"
        notes = "n" * 300
        r = ask(client, rep, "summarize-meeting", notes=notes)
        result = r.json()["result"]
        assert result["summary"] == "n" * 200
        assert result["actionItems"] == []

    def test_ask_question_uses_scoped_counts(self, client, db, rep, other_rep, fake_llm):
        make_lead(db, rep)
        make_lead(db, other_rep)
        make_lead(db, other_rep)
        db.add(Opportunity(name="Open", stage=OpportunityStage.PROPOSAL, amount=1000, assigned_to_id=rep.id))
        db.add(Opportunity(name="Won", stage=OpportunityStage.CLOSED_WON, amount=5000, assigned_to_id=rep.id))
        db.add(Opportunity(name="Other", stage=OpportunityStage.PROPOSAL, amount=9000, assigned_to_id=other_rep.id))
        db.commit()

        r = ask(client, rep, "ask-question", question="How is my pipeline?")
        assert r.status_code == 200
        prompt = fake_llm.prompts[0]
        assert "Total Leads: 1" in prompt
        assert "Active Opportunities: 1" in prompt
        assert "Pipeline Value: $1,000.00" in prompt

    def test_provider_failure_is_generic_500(self, client, rep, fake_llm):
        fake_llm.reply = RuntimeError("upstream exploded with secret details")
        r = ask(client, rep, "suggest-followup", leadName="Jane")
        assert r.status_code == 500
        assert r.json() == {"error": "AI request failed"}

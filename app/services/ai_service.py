"""
AI assistant actions.

Each action builds a prompt, calls the LLM once and shapes the answer.
Structured answers are pulled out of the model text with a brace regex;
when the model returns no parsable JSON a fixed fallback is used instead.
"""
import json
import logging
import re

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import CRMError, ValidationError
from app.models.lead import Lead
from app.models.user import User
from app.services.crm_service import CRMService
from app.services.llm_service import LLMService

logger = logging.getLogger(__name__)

JSON_BLOCK = re.compile(r"\{[\s\S]*\}")

TONES = ("formal", "friendly", "persuasive")


def extract_json(text: str, fallback: dict) -> dict:
    match = JSON_BLOCK.search(text or "")
    if not match:
        return fallback
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return fallback
    return data if isinstance(data, dict) else fallback


def _require(params: dict, key: str) -> str:
    value = params.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"'{key}' is required")
    return value


class AIService:
    def __init__(self, db: Session, actor: User, llm: LLMService = None):
        self.db = db
        self.actor = actor
        self._llm = llm
        self.actions = {
            "generate-email": self.generate_email,
            "score-lead": self.score_lead,
            "summarize-meeting": self.summarize_meeting,
            "ask-question": self.ask_question,
            "suggest-followup": self.suggest_followup,
        }

    @property
    def llm(self) -> LLMService:
        if self._llm is None:
            self._llm = LLMService()
        return self._llm

    def run(self, action: str, params: dict):
        handler = self.actions.get(action)
        if handler is None:
            raise ValidationError("Unknown action")

        try:
            return handler(params or {})
        except CRMError:
            raise
        except Exception as e:
            logger.error(f"AI action {action} failed for {self.actor.id}: {e}")
            raise CRMError("AI request failed")

    # ---------------------------------------------------------
    # ACTIONS
    # ---------------------------------------------------------
    def generate_email(self, params: dict) -> str:
        recipient = _require(params, "recipientName")
        company = params.get("recipientCompany")
        tone = params.get("tone") if params.get("tone") in TONES else "friendly"

        prompt = (
            "Generate a professional email draft with the following parameters:\n\n"
            f"Recipient: {recipient}{f' from {company}' if company else ''}\n"
            f"Context/Purpose: {params.get('context', '')}\n"
            f"Tone: {tone}\n"
            f"Sender: {self.actor.name or 'Sales Team'}\n\n"
            "Write a complete email including subject line, greeting, body, and signature. "
            'Format it clearly with "Subject:" on the first line.'
        )
        return self.llm.complete(prompt)

    def score_lead(self, params: dict) -> dict:
        prompt = (
            "Analyze this sales lead and provide a quality score from 1-100, "
            "along with reasoning and suggested next steps.\n\n"
            "Lead Data:\n"
            f"- Name: {params.get('firstName', '')} {params.get('lastName', '')}\n"
            f"- Company: {params.get('company') or 'Not provided'}\n"
            f"- Job Title: {params.get('jobTitle') or 'Not provided'}\n"
            f"- Lead Source: {params.get('source') or 'Unknown'}\n"
            f"- Estimated Value: {params.get('estimatedValue') or 'Not provided'}\n"
            f"- Number of Interactions: {params.get('interactions') or 0}\n"
            f"- Days Since Created: {params.get('daysSinceCreated') or 0}\n\n"
            "Respond in JSON format:\n"
            '{"score": <number 1-100>, "reasoning": "<brief explanation>", '
            '"nextSteps": ["<action 1>", "<action 2>", "<action 3>"]}'
        )
        text = self.llm.complete(prompt, temperature=0.3)
        return extract_json(text, {
            "score": 50,
            "reasoning": "Unable to analyze",
            "nextSteps": ["Follow up with lead"],
        })

    def summarize_meeting(self, params: dict) -> dict:
        notes = _require(params, "notes")
        prompt = (
            "Analyze these meeting notes and provide a structured summary.\n\n"
            f"Meeting Notes:\n{notes}\n\n"
            "Respond in JSON format:\n"
            '{"summary": "<2-3 sentence summary>", "actionItems": ["..."], '
            '"keyDecisions": ["..."], "followUpDate": "<date if mentioned, or null>"}'
        )
        text = self.llm.complete(prompt, temperature=0.3)
        return extract_json(text, {
            "summary": notes[:200],
            "actionItems": [],
            "keyDecisions": [],
        })

    def crm_context(self) -> dict:
        """Counts the asking user is allowed to see."""
        leads = self.db.query(func.count(Lead.id))
        if not self.actor.is_admin:
            leads = leads.filter(Lead.assigned_to_id == self.actor.id)

        crm = CRMService(self.db, self.actor)
        pipeline = crm.pipeline_summary()
        return {
            "leads": leads.scalar() or 0,
            "contacts": crm.count_contacts(),
            "open_opportunities": pipeline["open_opportunities"],
            "pipeline_value": pipeline["pipeline_value"],
        }

    def ask_question(self, params: dict) -> str:
        question = _require(params, "question")
        context = self.crm_context()
        prompt = (
            "You are a helpful CRM assistant. Answer the user's question based on the provided context.\n\n"
            "CRM Context:\n"
            f"- Total Leads: {context['leads']}\n"
            f"- Total Contacts: {context['contacts']}\n"
            f"- Active Opportunities: {context['open_opportunities']}\n"
            f"- Pipeline Value: ${context['pipeline_value']:,.2f}\n\n"
            f"User Question: {question}\n\n"
            "Provide a helpful, concise answer. If you don't have enough information, "
            "suggest what data would be needed."
        )
        return self.llm.complete(prompt)

    def suggest_followup(self, params: dict) -> str:
        prompt = (
            "Suggest a follow-up message for a sales lead.\n\n"
            f"Lead: {_require(params, 'leadName')}\n"
            f"Last Interaction: {params.get('lastInteraction', 'Unknown')}\n"
            f"Days Since Last Contact: {params.get('daysSinceContact', 0)}\n"
            f"Previous Outcome: {params.get('previousOutcome', 'Unknown')}\n\n"
            "Write a short, compelling follow-up message (2-3 sentences) "
            "that would be appropriate for SMS or a brief email."
        )
        return self.llm.complete(prompt)

"""Chat session model for the finance assistant"""

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List

ADVISOR_INSTRUCTIONS = """You are Ruby, a friendly, professional, and highly knowledgeable Indian Financial Advisor.

Your expertise covers:
1. Indian investment instruments (SIP, Mutual Funds, PPF, NPS, FD, RD, Stocks).
2. Indian Taxation (Income Tax slabs, Old vs New Regime, Tax saving under 80C, 80D, etc.).
3. Loans (Home Loan, EMI calculations, RBI Repo rates).
4. General financial planning for Indian families.

App Context:
- The user is using "Sky Financial", which has a "Tax Savings" calculator that compares Old vs New Regime (FY 2024-25) using standard deductions (75k for New, 50k for Old). If they ask about tax calculation discrepancies, refer to this context.

Specific Instructions:
- If the user asks for a contact number, phone number, or how to contact support/admin, YOU MUST REPLY with: "You can reach us at email: skyrisinvestment@gmail.com". Do not provide any other phone number.

Personality traits:
- Helpful, polite, and encouraging.
- You explain complex financial terms in simple English.
- You ALWAYS use formatting like bullet points, bold text for emphasis.
- You use the Indian Rupee symbol (₹) and lakhs/crores format where appropriate.

Constraints:
- If asked about non-financial topics, politely decline and steer the conversation back to finance.
- Do not provide specific "buy/sell" stock recommendations (e.g., "Buy Reliance now"). Instead, explain how to analyze a stock or the concept of diversification.
- Always include a disclaimer that you are an AI and this is for informational purposes only, not legal financial advice.
"""

WELCOME_MESSAGE = (
    "Namaste! I'm **Ruby**, your personal financial assistant. "
    "Ask me about SIPs, Loans, Tax planning, or any other financial topic!"
)

FALLBACK_REPLY = (
    "I'm having a little trouble connecting to the financial database right now. "
    "Please try again in a moment."
)


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


@dataclass
class ChatMessage:
    """Single turn in a conversation"""

    role: ChatRole
    text: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ChatSession:
    """
    Conversation handle owned by the caller.

    History only grows through record_exchange, so it always alternates
    user/model turns and never holds a half-finished reply. reply_lock is
    held while a reply streams so turns are produced one at a time.
    """

    system_instruction: str = ADVISOR_INSTRUCTIONS
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    history: List[ChatMessage] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    reply_lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    def record_exchange(self, user_text: str, reply_text: str) -> None:
        """Append a completed user message and the assistant's reply"""
        self.history.append(ChatMessage(role=ChatRole.USER, text=user_text))
        self.history.append(ChatMessage(role=ChatRole.MODEL, text=reply_text))

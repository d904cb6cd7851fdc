# ============================================================================
# src/pdf_chat/prompts/templates.py
# ============================================================================
"""
System Prompt Templates

Provides:
- Generic document question-answering prompt
- Blood-test report analysis prompt
- Template selection by classification verdict

The medical prompt's section headers and closing disclaimer are relied
on by the client that renders replies; keep them verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class PromptTask(Enum):
    """What a system prompt sets the assistant up to do"""
    DOCUMENT_QA = "document_qa"
    MEDICAL_REPORT_ANALYSIS = "medical_report_analysis"


@dataclass(frozen=True)
class PromptTemplate:
    """System prompt template"""
    name: str
    version: str
    task: PromptTask
    template: str
    description: str
    required_fields: List[str] = field(default_factory=list)

    def format(self, **kwargs) -> str:
        """
        Format template with provided values.

        Values are substituted verbatim; braces inside them are not
        interpreted.

        Args:
            **kwargs: Template variables

        Returns:
            Formatted prompt
        """
        missing = [f for f in self.required_fields if f not in kwargs]
        if missing:
            raise ValueError(f"Missing required fields: {missing}")

        return self.template.format(**kwargs)


# Section headers of the medical analysis, in the order the model must emit them
MEDICAL_SECTION_HEADERS = (
    "ANALYSIS",
    "DIAGNOSIS",
    "HEALTH SCORE",
    "RECOMMENDED ACTIONS",
    "DIETARY RECOMMENDATIONS",
    "EXERCISE SUGGESTIONS",
    "DISCLAIMER",
)

MEDICAL_DISCLAIMER = (
    "This analysis is for informational purposes only and is not a substitute "
    "for professional medical advice, diagnosis, or treatment, so please consult "
    "a qualified healthcare provider about your results."
)

# First user turn sent automatically when a blood-test report is loaded
AUTO_ANALYSIS_PROMPT = "Analyze this blood test report in detail"


GENERIC_DOCUMENT_TEMPLATE = PromptTemplate(
    name="document_qa",
    version="1",
    task=PromptTask.DOCUMENT_QA,
    template="""You are a helpful assistant that answers questions based on the following PDF content:

{document_text}

Answer questions based on this content. If the information isn't in the document, say so politely.""",
    description="Answer questions strictly from an uploaded document",
    required_fields=["document_text"],
)


MEDICAL_REPORT_TEMPLATE = PromptTemplate(
    name="medical_report_analysis",
    version="1",
    task=PromptTask.MEDICAL_REPORT_ANALYSIS,
    template="""You are a knowledgeable medical assistant who helps patients understand their blood test reports. Base every answer on the report below and do not invent values that are not in it.

BLOOD TEST REPORT:
{document_text}

Write your answer in plain text. Do not use markdown: no asterisks, no pound signs, no bold or italic text and no tables. Put each section header in capital letters on its own line, followed by a colon. Use exactly these sections, in this order:

ANALYSIS:
Go through every test result. Compare each value with its reference range and state whether it is normal, high, low or borderline.

DIAGNOSIS:
Explain in simple language which conditions or risks the abnormal values may point to. If every value is normal, say so.

HEALTH SCORE:
Give an overall health score from 1 to 10 for these results, followed by one sentence explaining the score.

RECOMMENDED ACTIONS:
List concrete next steps, such as follow-up tests or which kind of specialist to see, ordered by urgency.

DIETARY RECOMMENDATIONS:
Suggest specific foods to eat more of and foods to limit, based on the abnormal values.

EXERCISE SUGGESTIONS:
Suggest suitable types, frequency and intensity of physical activity for this person.

DISCLAIMER:
Finish with this exact sentence and nothing after it:
""" + MEDICAL_DISCLAIMER,
    description="Structured blood-test report analysis with fixed plain-text sections",
    required_fields=["document_text"],
)


def select_template(is_medical: bool) -> PromptTemplate:
    """Pick the system prompt template for a classification verdict."""
    return MEDICAL_REPORT_TEMPLATE if is_medical else GENERIC_DOCUMENT_TEMPLATE


def render_system_prompt(document_text: str, is_medical: bool) -> str:
    """Render the system prompt for a document with the given verdict."""
    return select_template(is_medical).format(document_text=document_text)

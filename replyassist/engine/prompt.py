import json
from typing import Sequence

from replyassist.core.utils.text import truncate_text

from .types import Intent

ANSWER_PREVIEW_CHARS = 220
MAX_EXAMPLES = 6


def candidate_summary(intent: Intent) -> dict:
    return {
        "id": intent.id,
        "title": intent.title,
        "answerPreview": truncate_text(intent.answer, ANSWER_PREVIEW_CHARS),
        "examples": list(intent.examples[:MAX_EXAMPLES]),
    }


def build_rerank_prompt(question: str, candidates: Sequence[Intent]) -> str:
    """Selection-only prompt: the model picks and orders ids, it never writes answers."""
    summaries = json.dumps([candidate_summary(c) for c in candidates], ensure_ascii=False, indent=2)
    return f"""너는 고객센터 답변 라우터다. 새 답변을 작성하지 말고, 아래 후보 인텐트 중 고객 질문에 가장 맞는 것을 골라 최대 3개까지 순서대로 나열하라.

규칙:
1) 후보 목록에 있는 id만 사용한다. 목록에 없는 id를 만들어내지 않는다.
2) JSON 객체 하나만 출력한다. 설명, 마크다운, 코드펜스 없이.
3) confidencePct는 0~100 사이 정수다.
4) reason은 이 후보가 맞는 이유를 한 줄(60자 이내)로 쓴다.

고객 질문:
{json.dumps(question, ensure_ascii=False)}

후보 목록:
{summaries}

응답 형식:
{{"ranked":[{{"intentId":"...","confidencePct":85,"reason":"..."}},{{"intentId":"...","confidencePct":10,"reason":"..."}}]}}"""

"""Shared fixtures: a small Korean CS catalog, a fake clock and a fake genai client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.helpers import FakeClock, FakePager, make_intent

CATALOG = [
    make_intent(
        "deposit_limit",
        "보증금/입찰한도 안내",
        "보증금은 낙찰 후 미결제를 방지하기 위한 금액입니다. 입금하신 보증금의 10배까지 입찰한도가 부여됩니다.",
        ["보증금은 왜 필요한가요?", "보증금은 얼마 입금해야 하나요?", "입찰한도를 늘리고 싶어요"],
        ["보증금"],
    ),
    make_intent(
        "shipping_status",
        "배송/출고 일정 안내",
        "낙찰 상품은 결제 확인 후 영업일 기준 3~5일 이내 출고되며, 출고 시 송장번호를 문자로 안내드립니다.",
        ["배송은 언제 되나요?", "물건이 아직 안와요", "송장번호 알려주세요"],
        ["배송"],
    ),
    make_intent(
        "appraisal",
        "정품 감정 안내",
        "모든 상품은 출고 전 전문 감정사의 검수를 거치며, 요청 시 감정서를 함께 발송해 드립니다.",
        ["정품 맞나요?", "감정서 받을 수 있나요?", "가품이면 어떻게 되나요?"],
    ),
    make_intent(
        "tax_invoice",
        "세금계산서 발행 안내",
        "사업자 회원은 결제 완료 후 마이페이지에서 세금계산서 발행을 신청할 수 있으며, 익영업일에 발행됩니다.",
        ["세금계산서 발행되나요?", "사업자 증빙 가능한가요?"],
    ),
    make_intent(
        "repair",
        "수선 안내",
        "구매하신 상품의 수선은 제휴 수선업체를 통해 접수 가능하며, 비용과 기간은 상품 확인 후 안내드립니다.",
        ["수선 맡길 수 있나요?", "가방 수리 가능한가요?"],
    ),
]


@pytest.fixture
def catalog():
    return list(CATALOG)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def genai_client():
    """MagicMock shaped like ``genai.Client`` with async generate/list."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.list = AsyncMock(return_value=FakePager([]))
    return client

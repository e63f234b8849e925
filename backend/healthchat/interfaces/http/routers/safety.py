from fastapi import APIRouter
from healthchat.domain.safety.service import emergency_reply, matched_keyword
from healthchat.schemas.chat import ChatReply
from healthchat.schemas.common import ClassifyResponse

router = APIRouter()

@router.get("/classify", response_model=ClassifyResponse)
def safe_classify(text: str):
    kw = matched_keyword(text)
    return ClassifyResponse(is_emergency=kw is not None, keyword=kw)

@router.get("/emergency", response_model=ChatReply)
def safe_emergency():
    return emergency_reply()

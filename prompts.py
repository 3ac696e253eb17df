"""
prompts.py
==========
Message builders for every generative task.

Keeping prompt text here rather than inline in the mappers means:
  - Each task's system prompt is easy to find and edit in isolation.
  - Tests can assert on the exact messages without a model call.
  - English and Thai variants sit side by side.

Builders here:
  build_case_generation_messages()   — full mystery in one JSON document
  build_clue_analysis_messages()     — significance, suspect links, next steps
  build_suspect_analysis_messages()  — trustworthiness, inconsistencies, questions
  build_interview_messages()         — in-character answer with replayed history
  build_solution_messages()          — adjudicate the player's accusation
  build_translation_messages()       — plain en <-> th translation

Every builder returns an ordered list of ChatMessage.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Union

from config import GAME_CONFIG
from models import (
    Case,
    ChatMessage,
    Clue,
    GenerationParams,
    Interview,
    InterviewTurn,
    Suspect,
)

InterviewRecord = Union[Interview, Sequence[InterviewTurn], None]


def _system(content: str) -> ChatMessage:
    return ChatMessage(role="system", content=content.strip())


def _user(content: str) -> ChatMessage:
    return ChatMessage(role="user", content=content.strip())


def _lines(items: Iterable[str], empty: str = "-") -> str:
    text = "\n".join(items)
    return text if text else empty


# ---------------------------------------------------------------------------
# Case generation
# ---------------------------------------------------------------------------

CASE_GENERATION_PROMPT_EN = f"""
You are a master detective story creator. Create a complete detective case with:
1. A detailed case description with a title, summary, location, date, and time.
2. {GAME_CONFIG.min_clues}-{GAME_CONFIG.max_clues} clues with descriptions, locations, and relevance.
3. {GAME_CONFIG.min_suspects}-{GAME_CONFIG.max_suspects} suspects with names, descriptions, backgrounds, motives, and alibis.
4. A clear solution identifying which suspect is guilty and why.

The case must be logical, solvable through deduction, and have clear connections
between clues and suspects. Exactly one suspect is guilty.

OUTPUT FORMAT — return ONLY this JSON object:
{{
  "case": {{
    "title": "...", "description": "...", "summary": "...",
    "difficulty": "easy | medium | hard", "location": "...",
    "dateTime": "ISO-8601 date and time"
  }},
  "clues": [
    {{"title": "...", "description": "...", "location": "...",
      "type": "physical | testimonial | digital",
      "relevance": "critical | important | minor"}}
  ],
  "suspects": [
    {{"name": "...", "description": "...", "background": "...",
      "motive": "...", "alibi": "...", "isGuilty": false}}
  ],
  "solution": {{"culprit": "exact name of the guilty suspect", "reasoning": "..."}}
}}
"""

CASE_GENERATION_PROMPT_TH = f"""
คุณเป็นนักเขียนนิยายสืบสวนชั้นเยี่ยม สร้างคดีสืบสวนที่สมบูรณ์โดยมีองค์ประกอบดังนี้:
1. รายละเอียดคดีพร้อมชื่อเรื่อง สรุปย่อ สถานที่ วันที่ และเวลา
2. {GAME_CONFIG.min_clues}-{GAME_CONFIG.max_clues} หลักฐานพร้อมคำอธิบาย ตำแหน่งที่พบ และความสำคัญ
3. {GAME_CONFIG.min_suspects}-{GAME_CONFIG.max_suspects} ผู้ต้องสงสัยพร้อมชื่อ คำอธิบาย ประวัติ แรงจูงใจ และข้ออ้างที่อยู่
4. คำตอบที่ชัดเจนว่าผู้ต้องสงสัยคนไหนเป็นผู้กระทำผิดและเพราะอะไร

คดีควรมีเหตุผล สามารถแก้ไขได้ด้วยการอนุมาน และมีความเชื่อมโยงที่ชัดเจนระหว่างหลักฐานและผู้ต้องสงสัย
มีผู้กระทำผิดเพียงคนเดียวเท่านั้น

ตอบเป็น JSON เท่านั้น โดยใช้คีย์ภาษาอังกฤษดังนี้:
{{
  "case": {{"title": "...", "description": "...", "summary": "...",
            "difficulty": "easy | medium | hard", "location": "...", "dateTime": "..."}},
  "clues": [{{"title": "...", "description": "...", "location": "...",
              "type": "physical | testimonial | digital",
              "relevance": "critical | important | minor"}}],
  "suspects": [{{"name": "...", "description": "...", "background": "...",
                 "motive": "...", "alibi": "...", "isGuilty": false}}],
  "solution": {{"culprit": "ชื่อผู้กระทำผิด", "reasoning": "..."}}
}}
"""

_DIFFICULTY_TH = {"easy": "ง่าย", "medium": "ปานกลาง", "hard": "ยาก"}


def build_case_generation_user_prompt(params: GenerationParams) -> str:
    """
    Describe the requested case, adding a clause only for each optional
    parameter that was actually provided.

    Example:
        >>> build_case_generation_user_prompt(GenerationParams(difficulty="hard", era="Victorian"))
        'Create a hard difficulty detective case during the Victorian era'
    """
    if params.language == "th":
        prompt = f"สร้างคดีสืบสวนที่มีความยาก {_DIFFICULTY_TH[params.difficulty]}"
        if params.theme:
            prompt += f" ในธีม {params.theme}"
        if params.location:
            prompt += f" ที่เกิดขึ้นใน {params.location}"
        if params.era:
            prompt += f" ในยุค {params.era}"
        return prompt

    prompt = f"Create a {params.difficulty} difficulty detective case"
    if params.theme:
        prompt += f" with a {params.theme} theme"
    if params.location:
        prompt += f" set in {params.location}"
    if params.era:
        prompt += f" during the {params.era} era"
    return prompt


def build_case_generation_messages(params: GenerationParams) -> List[ChatMessage]:
    system = CASE_GENERATION_PROMPT_TH if params.language == "th" else CASE_GENERATION_PROMPT_EN
    return [_system(system), _user(build_case_generation_user_prompt(params))]


# ---------------------------------------------------------------------------
# Clue analysis
# ---------------------------------------------------------------------------

CLUE_ANALYSIS_PROMPT_EN = """
You are a brilliant detective assistant helping analyze evidence in a case.
Given details about a clue and the case context, provide:
1. A summary of the clue's significance
2. Connections to suspects
3. Suggested next investigative steps

Be precise, logical, and focus on deduction based on the evidence provided.

IMPORTANT: respond in valid JSON with this structure:
{
  "summary": "A comprehensive summary of the clue's significance",
  "connections": [
    {
      "suspect": "Name of suspect",
      "connectionType": "Type of connection (e.g., direct, indirect)",
      "description": "How this clue connects to the suspect"
    }
  ],
  "nextSteps": ["First investigative step", "Second investigative step"]
}
"""

CLUE_ANALYSIS_PROMPT_TH = """
คุณเป็นผู้ช่วยนักสืบที่ฉลาดเฉียบแหลมที่กำลังช่วยวิเคราะห์หลักฐานในคดี
เมื่อได้รับรายละเอียดเกี่ยวกับหลักฐานและบริบทของคดี โปรดให้การวิเคราะห์โดยละเอียดซึ่งรวมถึง:
1. สรุปความสำคัญของหลักฐาน
2. ความเชื่อมโยงกับผู้ต้องสงสัย
3. ขั้นตอนการสืบสวนต่อไปที่แนะนำ

มีความแม่นยำ มีเหตุผล และมุ่งเน้นการอนุมานตามหลักฐานที่มี

สำคัญ: คุณต้องตอบในรูปแบบ JSON ที่ถูกต้องตามโครงสร้างต่อไปนี้:
{
  "summary": "สรุปหลักฐานแบบรอบด้าน",
  "connections": [
    {
      "suspect": "ชื่อผู้ต้องสงสัย",
      "connectionType": "ประเภทของความเชื่อมโยง (เช่น ทางตรง ทางอ้อม)",
      "description": "คำอธิบายว่าหลักฐานนี้เชื่อมโยงกับผู้ต้องสงสัยอย่างไร"
    }
  ],
  "nextSteps": ["ขั้นตอนแรกที่ควรทำต่อไป", "ขั้นตอนที่สองที่ควรทำต่อไป"]
}
"""


def build_clue_analysis_messages(
    clue: Clue,
    suspects: Sequence[Suspect],
    case: Case,
    discovered_clues: Sequence[Clue],
    language: str = "en",
) -> List[ChatMessage]:
    """
    Case context, the target clue, every suspect and every OTHER discovered
    clue (the target itself is excluded from the situational context).
    """
    suspect_lines = _lines(f"{s.name}: {s.description}" for s in suspects)
    other_lines = _lines(
        f"{c.title}: {c.description}" for c in discovered_clues if c.id != clue.id
    )

    if language == "th":
        user = f"""
ข้อมูลคดี:
ชื่อคดี: {case.title}
สรุป: {case.summary}
สถานที่: {case.location}
วันที่และเวลา: {case.date_time}

หลักฐานที่ต้องการวิเคราะห์:
ชื่อ: {clue.title}
คำอธิบาย: {clue.description}
สถานที่พบ: {clue.location}
ประเภท: {clue.type}
ความสำคัญ: {clue.relevance}

ผู้ต้องสงสัย:
{suspect_lines}

หลักฐานอื่นที่พบแล้ว:
{other_lines}

กรุณาวิเคราะห์หลักฐานนี้และตอบในรูปแบบ JSON ตามโครงสร้างที่กำหนดในคำแนะนำระบบ
"""
        return [_system(CLUE_ANALYSIS_PROMPT_TH), _user(user)]

    user = f"""
CASE INFORMATION:
  Title        : {case.title}
  Summary      : {case.summary}
  Location     : {case.location}
  Date and time: {case.date_time}

CLUE TO ANALYZE:
  Title         : {clue.title}
  Description   : {clue.description}
  Location found: {clue.location}
  Type          : {clue.type}
  Relevance     : {clue.relevance}

SUSPECTS:
{suspect_lines}

OTHER DISCOVERED CLUES:
{other_lines}

Analyze this clue and respond in the JSON format specified in the system instructions.
"""
    return [_system(CLUE_ANALYSIS_PROMPT_EN), _user(user)]


# ---------------------------------------------------------------------------
# Suspect analysis
# ---------------------------------------------------------------------------

SUSPECT_ANALYSIS_PROMPT_EN = """
You are a brilliant detective assistant helping analyze suspects in a case.
Given details about a suspect and the case context, provide:
1. An assessment of the suspect's trustworthiness (0-100)
2. Potential inconsistencies in their story or background
3. Connections to discovered clues
4. Suggested questions for further interrogation

Be precise, logical, and focus on deduction based on the evidence provided.

IMPORTANT: respond in valid JSON with this structure:
{
  "trustworthiness": 65,
  "inconsistencies": ["inconsistency 1", "inconsistency 2"],
  "connections": [
    {"clue": "Title of clue", "connectionType": "strong | moderate | weak",
     "description": "How this suspect connects to the clue"}
  ],
  "suggestedQuestions": ["question 1", "question 2"]
}
"""

SUSPECT_ANALYSIS_PROMPT_TH = """
คุณเป็นผู้ช่วยนักสืบที่ฉลาดเฉียบแหลมที่กำลังช่วยวิเคราะห์ผู้ต้องสงสัยในคดี
เมื่อได้รับรายละเอียดเกี่ยวกับผู้ต้องสงสัยและบริบทของคดี โปรดให้การวิเคราะห์โดยละเอียดซึ่งรวมถึง:
1. การประเมินความน่าเชื่อถือของผู้ต้องสงสัย (ในระดับ 0-100)
2. ความไม่สอดคล้องที่อาจเกิดขึ้นในเรื่องราวหรือประวัติของพวกเขา
3. ความเชื่อมโยงกับหลักฐานที่ค้นพบ
4. คำถามที่แนะนำสำหรับการสอบสวนเพิ่มเติม

มีความแม่นยำ มีเหตุผล และมุ่งเน้นการอนุมานตามหลักฐานที่มี

ตอบเป็น JSON เท่านั้น โดยใช้คีย์ภาษาอังกฤษดังนี้:
{
  "trustworthiness": 65,
  "inconsistencies": ["..."],
  "connections": [{"clue": "ชื่อหลักฐาน", "connectionType": "...", "description": "..."}],
  "suggestedQuestions": ["..."]
}
"""


def interview_exchanges(interview: InterviewRecord) -> List[InterviewTurn]:
    """
    Answered exchanges from either a conversation or a legacy Interview.

    Pending turns and unasked legacy questions are skipped.
    """
    if interview is None:
        return []
    if isinstance(interview, Interview):
        return [
            InterviewTurn(id=q.id, question=q.question, answer=q.answer)
            for q in interview.questions
            if q.asked
        ]
    return [turn for turn in interview if not turn.pending and turn.answer]


def build_suspect_analysis_messages(
    suspect: Suspect,
    clues: Sequence[Clue],
    case: Case,
    interview: InterviewRecord = None,
    language: str = "en",
) -> List[ChatMessage]:
    exchanges = interview_exchanges(interview)

    if language == "th":
        clue_lines = _lines(f"{c.title}: {c.description} (พบที่: {c.location})" for c in clues)
        user = f"""
ข้อมูลคดี:
ชื่อคดี: {case.title}
สรุป: {case.summary}
สถานที่: {case.location}
วันที่และเวลา: {case.date_time}

ผู้ต้องสงสัยที่ต้องการวิเคราะห์:
ชื่อ: {suspect.name}
คำอธิบาย: {suspect.description}
ประวัติ: {suspect.background}
แรงจูงใจที่เป็นไปได้: {suspect.motive}
ข้ออ้างที่อยู่: {suspect.alibi}

หลักฐานที่พบ:
{clue_lines}
"""
        if exchanges:
            records = "\n\n".join(f"คำถาม: {t.question}\nคำตอบ: {t.answer}" for t in exchanges)
            user += f"\nบันทึกการสัมภาษณ์:\n{records}\n"
        user += "\nกรุณาวิเคราะห์ผู้ต้องสงสัยนี้และตอบในรูปแบบ JSON ตามโครงสร้างที่กำหนดในคำแนะนำระบบ"
        return [_system(SUSPECT_ANALYSIS_PROMPT_TH), _user(user)]

    clue_lines = _lines(f"{c.title}: {c.description} (Found at: {c.location})" for c in clues)
    user = f"""
CASE INFORMATION:
  Title        : {case.title}
  Summary      : {case.summary}
  Location     : {case.location}
  Date and time: {case.date_time}

SUSPECT TO ANALYZE:
  Name           : {suspect.name}
  Description    : {suspect.description}
  Background     : {suspect.background}
  Possible motive: {suspect.motive}
  Alibi          : {suspect.alibi}

DISCOVERED CLUES:
{clue_lines}
"""
    if exchanges:
        records = "\n\n".join(f"Question: {t.question}\nAnswer: {t.answer}" for t in exchanges)
        user += f"\nINTERVIEW RECORDS:\n{records}\n"
    user += "\nAnalyze this suspect and respond in the JSON format specified in the system instructions."
    return [_system(SUSPECT_ANALYSIS_PROMPT_EN), _user(user)]


# ---------------------------------------------------------------------------
# Suspect interview
# ---------------------------------------------------------------------------

def build_interview_messages(
    question: str,
    suspect: Suspect,
    clues: Sequence[Clue],
    case: Case,
    previous_questions: Sequence[InterviewTurn] = (),
    language: str = "en",
) -> List[ChatMessage]:
    """
    Persona prompt, profile context, the replayed conversation, then the new
    question as the final user turn.

    The context message tells the suspect whether they are guilty and, in the
    same breath, forbids confirming or denying guilt outright. Prior turns are
    replayed as alternating user/assistant messages so the model keeps its
    own earlier answers consistent.
    """
    if language == "th":
        system = (
            f"คุณเป็น{suspect.name} ผู้ต้องสงสัยในคดี {case.title} "
            "ตอบคำถามตามบุคลิกและข้อมูลของคุณ"
        )
        secret = (
            "คุณเป็นคนที่กระทำผิดในคดีนี้จริง แต่พยายามปกปิดความจริง"
            if suspect.is_guilty
            else "คุณไม่ได้เป็นผู้กระทำผิดในคดีนี้ แต่คุณอาจมีความลับที่คุณไม่ต้องการให้คนอื่นรู้"
        )
        evidence = _lines(f"- {c.title}: {c.description}" for c in clues)
        context = f"""
ข้อมูลของคุณในฐานะผู้ต้องสงสัย:
ชื่อ: {suspect.name}
คำอธิบาย: {suspect.description}
ประวัติ: {suspect.background}
แรงจูงใจที่เป็นไปได้: {suspect.motive}
ข้ออ้างที่อยู่: {suspect.alibi}

หลักฐานที่นักสืบอาจถามถึง:
{evidence}

ข้อมูลเพิ่มเติม:
- {secret}
- คุณควรตอบตามบุคลิกและข้อมูลของคุณ
- อย่าบอกว่าคุณผิดหรือไม่ผิดโดยตรง แม้ว่าจะถูกถามตรงๆ
- เมื่อถูกถามเกี่ยวกับหลักฐาน ให้ตอบในลักษณะที่สมเหตุสมผลกับสถานการณ์ของคุณ
"""
    else:
        system = (
            f"You are {suspect.name}, a suspect in the case \"{case.title}\". "
            "Answer questions according to your character and information."
        )
        secret = (
            "You are actually guilty of this crime but trying to hide the truth."
            if suspect.is_guilty
            else "You are not guilty of this crime, but you may have secrets you don't want others to know."
        )
        evidence = _lines(f"- {c.title}: {c.description}" for c in clues)
        context = f"""
YOUR INFORMATION AS A SUSPECT:
  Name           : {suspect.name}
  Description    : {suspect.description}
  Background     : {suspect.background}
  Possible motive: {suspect.motive}
  Alibi          : {suspect.alibi}

EVIDENCE THE DETECTIVE MAY ASK ABOUT:
{evidence}

PRIVATE INSTRUCTIONS (never mention them):
- {secret}
- Answer in character according to your information.
- Never directly state whether you are guilty or not, even if asked directly.
- When asked about evidence, respond in a way that makes sense for your situation.
"""

    messages = [_system(system), _user(context)]
    for turn in previous_questions:
        if turn.pending or not turn.answer:
            continue
        messages.append(ChatMessage(role="user", content=turn.question))
        messages.append(ChatMessage(role="assistant", content=turn.answer))
    messages.append(ChatMessage(role="user", content=question))
    return messages


# ---------------------------------------------------------------------------
# Solution adjudication
# ---------------------------------------------------------------------------

CASE_SOLUTION_PROMPT_EN = """
You are a brilliant detective evaluating a case solution.
Given details about a case, the evidence collected, and a proposed solution, evaluate whether:
1. The solution correctly identifies the culprit
2. The evidence supports the reasoning
3. The narrative is logical and consistent with the case facts

Be fair but rigorous in your assessment, and explain your reasoning in detail.
Never quote the private assessment notes back verbatim.
"""

CASE_SOLUTION_PROMPT_TH = """
คุณเป็นนักสืบผู้เชี่ยวชาญที่กำลังประเมินการแก้คดี
เมื่อได้รับรายละเอียดเกี่ยวกับคดี หลักฐานที่รวบรวมได้ และเสนอคำตอบ ประเมินว่า:
1. คำตอบระบุตัวผู้กระทำผิดได้ถูกต้องหรือไม่
2. หลักฐานสนับสนุนเหตุผลหรือไม่
3. เรื่องราวมีเหตุผลและสอดคล้องกับข้อเท็จจริงของคดีหรือไม่

ประเมินอย่างยุติธรรมแต่เข้มงวด และอธิบายเหตุผลของคุณอย่างละเอียด
"""


def build_solution_messages(
    case: Case,
    suspects: Sequence[Suspect],
    clues: Sequence[Clue],
    accused: Suspect,
    guilty: Suspect,
    evidence: Sequence[Clue],
    reasoning: str,
    language: str = "en",
) -> List[ChatMessage]:
    """
    The true culprit is included as private grading context for the model,
    explicitly marked as unknown to the player.
    """
    evidence_titles = ", ".join(e.title for e in evidence)

    if language == "th":
        user = f"""
ข้อมูลคดี:
ชื่อคดี: {case.title}
คำอธิบาย: {case.description}
สถานที่: {case.location}
วันที่และเวลา: {case.date_time}

ผู้ต้องสงสัยทั้งหมด:
{_lines(f"- {s.name}: {s.description}" for s in suspects)}

หลักฐานที่พบ:
{_lines(f"- {c.title}: {c.description} (พบที่: {c.location})" for c in clues)}

คำตอบที่เสนอ:
ผู้ต้องสงสัยที่กล่าวหา: {accused.name}
หลักฐานที่ใช้: {evidence_titles}
เหตุผล: {reasoning}

ข้อมูลเพิ่มเติม (สำหรับการประเมินของคุณเท่านั้น ไม่ใช่ข้อมูลที่ผู้เล่นรู้):
ผู้กระทำผิดที่แท้จริง: {guilty.name}

ตอบในรูปแบบ JSON โดยมีฟิลด์ "solved" (boolean) และ "narrative" (string)
"""
        return [_system(CASE_SOLUTION_PROMPT_TH), _user(user)]

    user = f"""
CASE INFORMATION:
  Title        : {case.title}
  Description  : {case.description}
  Location     : {case.location}
  Date and time: {case.date_time}

ALL SUSPECTS:
{_lines(f"- {s.name}: {s.description}" for s in suspects)}

DISCOVERED CLUES:
{_lines(f"- {c.title}: {c.description} (Found at: {c.location})" for c in clues)}

PROPOSED SOLUTION:
  Accused suspect: {accused.name}
  Evidence used  : {evidence_titles}
  Reasoning      : {reasoning}

PRIVATE ASSESSMENT NOTES (for your assessment only, not known to the player):
  Actual culprit: {guilty.name}

Evaluate the proposed solution:
1. Whether the solution is correct (identifies the right culprit)
2. Whether the selected evidence supports the reasoning
3. A narrative of what likely happened

Respond in JSON with the fields "solved" (boolean) and "narrative" (string).
"""
    return [_system(CASE_SOLUTION_PROMPT_EN), _user(user)]


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------

LANGUAGE_NAMES = {"en": "English", "th": "Thai"}

TRANSLATION_DELIMITER = "|||TRANSLATE_DELIMITER|||"


def build_translation_messages(
    text: str,
    source: str,
    target: str,
    delimiter: Optional[str] = None,
) -> List[ChatMessage]:
    system = (
        "You are a professional translator who specializes in translating between "
        "English and Thai. Translate the given text accurately, preserving the meaning, "
        "tone, and style of the original text."
    )
    if delimiter:
        system += (
            f'\nThe input consists of separate segments joined by the delimiter "{delimiter}". '
            "Respond only with the translated segments joined by the same delimiter, "
            "keeping the exact number of segments."
        )
        user = (
            f"Translate the following {LANGUAGE_NAMES[source]} text segments to "
            f"{LANGUAGE_NAMES[target]}, keeping each segment separate:\n\n{text}"
        )
    else:
        system += "\nRespond only with the translated text, without any comments or explanations."
        user = f"Translate the following {LANGUAGE_NAMES[source]} text to {LANGUAGE_NAMES[target]}:\n\n{text}"
    return [_system(system), _user(user)]

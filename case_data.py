"""
case_data.py
============
Static narrative content: the seed cases every new game starts with, their
Thai overlay, and the sample case served when generation fails outside
production.

Centralising story data here means the seed mysteries can be swapped without
touching any mapper, reducer, or engine code.

To add a seed case:
    1. Append a Case to DEFAULT_CASES and its Clue / Suspect records below,
       stamped with the case id.
    2. Mark exactly one suspect of the case with is_guilty=True.
    3. Optionally add translated text fields to TRANSLATIONS, keyed by id.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from models import AppState, Case, Clue, GameState, Suspect

CLUE_IMAGE = "/clue.png"
SUSPECT_IMAGE = "/suspect.png"


# ---------------------------------------------------------------------------
# Seed cases
# ---------------------------------------------------------------------------

DEFAULT_CASES: Tuple[Case, ...] = (
    Case(
        id="case-001",
        title="The Museum Heist",
        description=(
            'The priceless "Diamond of Destiny" has been stolen from the National Museum '
            "during a high-profile exhibition. Security cameras were disabled, and the thief "
            "left few traces behind. The museum director has hired you to solve this case "
            "discreetly before the press gets wind of the theft."
        ),
        summary="A high-value diamond has been stolen from the National Museum with minimal evidence left behind.",
        location="National Museum",
        date_time="2023-11-15T22:30:00",
        difficulty="medium",
    ),
    Case(
        id="case-002",
        title="Vanishing Act",
        description=(
            "Famous magician Lorenzo Reed disappeared during his sold-out show at the Grand "
            "Theater. His final trick involved a locked water tank from which he never emerged. "
            "What initially appeared to be a tragic accident has taken a mysterious turn as his "
            "assistant received an anonymous note suggesting foul play."
        ),
        summary="A famous magician vanished during his performance in a water tank escape trick.",
        location="Grand Theater",
        date_time="2023-12-05T20:45:00",
        difficulty="hard",
    ),
    Case(
        id="case-003",
        title="The Poisoned Pen",
        description=(
            "Renowned author Sophia Blake was found dead in her study while working on her "
            "latest bestseller. The autopsy revealed traces of a rare poison. Multiple people "
            "had motives to silence her, as her upcoming memoir threatened to expose secrets "
            "of several prominent figures in the publishing world."
        ),
        summary="A bestselling author was poisoned while working on a revealing memoir.",
        location="Lakeside Mansion",
        date_time="2024-01-20T09:15:00",
        difficulty="easy",
    ),
)


DEFAULT_CLUES: Tuple[Clue, ...] = (
    # The Museum Heist
    Clue(
        id="clue-001-1",
        case_id="case-001",
        title="Security Footage Gap",
        description=(
            "A 15-minute gap in the security footage between 10:15 PM and 10:30 PM. "
            "The system shows signs of being professionally tampered with."
        ),
        location="Security Room",
        type="digital",
        discovered=True,
        relevance="critical",
        image_url=CLUE_IMAGE,
    ),
    Clue(
        id="clue-001-2",
        case_id="case-001",
        title="Glass Cutter Tool",
        description=(
            "A high-end glass cutting tool found hidden in a janitor's closet near the "
            "exhibition hall. Has a custom grip modification."
        ),
        location="Janitor Closet",
        type="physical",
        discovered=True,
        relevance="important",
        image_url=CLUE_IMAGE,
    ),
    Clue(
        id="clue-001-3",
        case_id="case-001",
        title="Staff Schedule",
        description=(
            "The staff roster shows that security guard James Miller called in sick last "
            "minute on the night of the theft, resulting in a smaller security team than normal."
        ),
        location="Admin Office",
        type="physical",
        discovered=True,
        relevance="important",
        image_url=CLUE_IMAGE,
    ),
    # Vanishing Act
    Clue(
        id="clue-002-1",
        case_id="case-002",
        title="Modified Water Tank",
        description=(
            "The escape mechanism in Lorenzo's water tank appears to have been subtly modified "
            "to malfunction. Changes would only be noticeable to someone familiar with the equipment."
        ),
        location="Performance Stage",
        type="physical",
        discovered=True,
        relevance="critical",
        image_url=CLUE_IMAGE,
    ),
    Clue(
        id="clue-002-2",
        case_id="case-002",
        title="Threatening Letter",
        description=(
            "A letter found in Lorenzo's dressing room warning him to \"stop stealing what isn't "
            'yours or face the consequences". Written using cut-out magazine letters.'
        ),
        location="Dressing Room",
        type="physical",
        discovered=True,
        relevance="important",
        image_url=CLUE_IMAGE,
    ),
    # The Poisoned Pen
    Clue(
        id="clue-003-1",
        case_id="case-003",
        title="Poison Bottle",
        description=(
            "Empty vial of rare plant toxin found hidden behind books in the study. The toxin "
            "is derived from a plant native to South America, often used by researchers."
        ),
        location="Study Bookshelf",
        type="physical",
        discovered=True,
        relevance="critical",
        image_url=CLUE_IMAGE,
    ),
    Clue(
        id="clue-003-2",
        case_id="case-003",
        title="Manuscript Pages",
        description=(
            "Pages from Sophia's upcoming memoir containing damaging allegations about a "
            "prominent publisher accepting bribes to promote certain authors."
        ),
        location="Desk Drawer",
        type="physical",
        discovered=True,
        relevance="important",
        image_url=CLUE_IMAGE,
    ),
    Clue(
        id="clue-003-3",
        case_id="case-003",
        title="Tea Cup Residue",
        description=(
            "Chemical analysis of Sophia's tea cup shows traces of the poison. The cup has only "
            "her fingerprints, suggesting she prepared the tea herself or the killer wore gloves."
        ),
        location="Study Desk",
        type="physical",
        discovered=True,
        relevance="critical",
        image_url=CLUE_IMAGE,
    ),
)


DEFAULT_SUSPECTS: Tuple[Suspect, ...] = (
    # The Museum Heist
    Suspect(
        id="suspect-001-1",
        case_id="case-001",
        name="James Miller",
        description="Security guard who called in sick on the night of the theft. Has worked at the museum for 12 years.",
        background="James has been struggling with gambling debts. Recently purchased an expensive watch despite financial troubles.",
        motive=(
            "Needs money to pay off significant gambling debts to dangerous people. Could have "
            "been paid to look the other way or provide inside information."
        ),
        alibi="Claims he was at home with food poisoning. No witnesses can confirm this.",
        image_url=SUSPECT_IMAGE,
    ),
    Suspect(
        id="suspect-001-2",
        case_id="case-001",
        name="Vanessa Reid",
        description="Professional art thief known for high-profile heists across Europe. Recently spotted in the city.",
        background=(
            "Has a reputation for meticulous planning and leaving minimal evidence. Known to "
            "have connections to black market art collectors."
        ),
        motive="The diamond would be a valuable addition to her resume and fetch millions from the right buyer.",
        alibi=(
            "Claims she was at a hotel bar during the time of the theft. Bartender confirms "
            'seeing her, but there\'s a 20-minute gap where she left to "take a call".'
        ),
        is_guilty=True,
        image_url=SUSPECT_IMAGE,
    ),
    Suspect(
        id="suspect-001-3",
        case_id="case-001",
        name="Dr. Harold Thompson",
        description=(
            "Museum curator who oversees the precious gems exhibition. Has extensive knowledge "
            "of the security systems."
        ),
        background=(
            "Recently divorced and facing alimony payments. Was passed over for promotion to "
            "museum director last year."
        ),
        motive=(
            "Financial pressure from divorce. Also expressed bitterness about being overlooked "
            "for the director position."
        ),
        alibi=(
            "Was attending a fundraising dinner across town. Multiple witnesses confirm his "
            "presence, though he left early claiming a headache."
        ),
        image_url=SUSPECT_IMAGE,
    ),
    # Vanishing Act
    Suspect(
        id="suspect-002-1",
        case_id="case-002",
        name="Victor Reyes",
        description="Rival magician who has publicly accused Lorenzo of stealing his signature illusions.",
        background=(
            "Career has been overshadowed by Lorenzo's success. Recently had a show canceled "
            "due to poor ticket sales."
        ),
        motive="Professional jealousy and accusations that Lorenzo stole his original trick designs.",
        alibi=(
            "Claims he was watching the show from the audience. Several attendees confirm seeing "
            "him, but he left his seat for approximately 15 minutes during intermission."
        ),
        is_guilty=True,
        image_url=SUSPECT_IMAGE,
    ),
    Suspect(
        id="suspect-002-2",
        case_id="case-002",
        name="Mina Chen",
        description="Lorenzo's assistant for the past five years. Knows all the mechanics of his illusions.",
        background=(
            "Has been trying to launch her own magic career but remains in Lorenzo's shadow. "
            "Recently had a public argument with Lorenzo over creative differences."
        ),
        motive=(
            "Could gain publicity and step into the spotlight with Lorenzo gone. Had knowledge "
            "to tamper with the equipment."
        ),
        alibi="Was on stage during the performance and visibly distressed when Lorenzo didn't emerge from the tank.",
        image_url=SUSPECT_IMAGE,
    ),
    Suspect(
        id="suspect-002-3",
        case_id="case-002",
        name="Thomas Gardner",
        description="Theater technician who helped set up the water tank apparatus.",
        background=(
            'Recently fired from another theater for "negligence." Has a history of substance '
            "abuse but claims to be clean now."
        ),
        motive="Had an altercation with Lorenzo during rehearsal when Lorenzo criticized his work in front of the crew.",
        alibi=(
            "Was operating lighting during the show. Colleagues confirm he was at his post, but "
            "the lighting booth has a clear view and access to the backstage area."
        ),
        image_url=SUSPECT_IMAGE,
    ),
    # The Poisoned Pen
    Suspect(
        id="suspect-003-1",
        case_id="case-003",
        name="Maxwell Green",
        description="Powerful publisher mentioned in Sophia's memoir. Has a reputation for ruthless business tactics.",
        background=(
            "Built his publishing empire through questionable means. Sophia's memoir allegedly "
            "contained evidence of him bribing critics and manipulating bestseller lists."
        ),
        motive=(
            "Sophia's memoir would damage his reputation and potentially lead to criminal "
            "charges for business practices."
        ),
        alibi=(
            "Was at a publishing industry dinner across town. Numerous witnesses confirm, but "
            'he stepped out "to make calls" several times.'
        ),
        image_url=SUSPECT_IMAGE,
    ),
    Suspect(
        id="suspect-003-2",
        case_id="case-003",
        name="Dr. Eleanor Reed",
        description="Botanist and former research colleague of Sophia's when she briefly worked in academia.",
        background=(
            "Expert in toxic plants and their properties. Had a falling out with Sophia over "
            "credit for research they conducted together years ago."
        ),
        motive=(
            "Sophia's memoir allegedly revealed that Eleanor stole research and claimed it as "
            "her own, which would destroy her academic career."
        ),
        alibi=(
            "Claims she was working late at her university laboratory. Security logs confirm "
            "she was in the building, but she could have left and returned unnoticed."
        ),
        is_guilty=True,
        image_url=SUSPECT_IMAGE,
    ),
    Suspect(
        id="suspect-003-3",
        case_id="case-003",
        name="Daniel Blake",
        description="Sophia's ex-husband who recently lost a bitter divorce settlement to her.",
        background=(
            "The divorce left him financially strained and publicly humiliated. Has been heard "
            'making threats about "getting even" with Sophia.'
        ),
        motive=(
            "Anger over the divorce settlement and ongoing alimony payments. Would inherit a "
            "valuable property if Sophia died within two years of the divorce."
        ),
        alibi=(
            "Claims he was at home alone watching TV. Neighbor saw his car in the driveway, but "
            "cannot confirm he was actually inside the house."
        ),
        image_url=SUSPECT_IMAGE,
    ),
)


def initial_state() -> AppState:
    """A fresh game: seed content, no progress."""
    return AppState(
        cases=DEFAULT_CASES,
        clues=DEFAULT_CLUES,
        suspects=DEFAULT_SUSPECTS,
        interviews=(),
        game_state=GameState(),
    )


# ---------------------------------------------------------------------------
# Translated content, keyed by entity id
#
# Only text fields appear here. Ids without an entry keep their English text.
# ---------------------------------------------------------------------------

TRANSLATIONS: Dict[str, Dict[str, Dict[str, Dict[str, str]]]] = {
    "th": {
        "cases": {
            "case-001": {
                "title": "การโจรกรรมพิพิธภัณฑ์",
                "summary": "เพชรล้ำค่าถูกขโมยไปจากพิพิธภัณฑ์แห่งชาติโดยแทบไม่ทิ้งร่องรอย",
                "description": (
                    'เพชร "Diamond of Destiny" ถูกขโมยไปจากพิพิธภัณฑ์แห่งชาติระหว่างงานนิทรรศการ '
                    "กล้องวงจรปิดถูกปิดการทำงาน และคนร้ายแทบไม่ทิ้งร่องรอยไว้ "
                    "ผู้อำนวยการพิพิธภัณฑ์จ้างคุณให้คลี่คลายคดีนี้อย่างเงียบที่สุด"
                ),
                "location": "พิพิธภัณฑ์แห่งชาติ",
            },
            "case-002": {
                "title": "การหายตัวปริศนา",
                "summary": "นักมายากลชื่อดังหายตัวไประหว่างการแสดงหนีออกจากถังน้ำ",
                "location": "โรงละครแกรนด์",
            },
            "case-003": {
                "title": "ปากกาอาบยาพิษ",
                "summary": "นักเขียนขายดีถูกวางยาพิษระหว่างเขียนบันทึกความทรงจำที่จะเปิดโปงความลับ",
                "location": "คฤหาสน์ริมทะเลสาบ",
            },
        },
        "clues": {
            "clue-001-1": {
                "title": "ภาพวงจรปิดที่หายไป",
                "description": "ภาพจากกล้องวงจรปิดหายไป 15 นาทีระหว่าง 22:15 ถึง 22:30 น. ระบบมีร่องรอยการดัดแปลงอย่างมืออาชีพ",
                "location": "ห้องรักษาความปลอดภัย",
            },
            "clue-001-2": {
                "title": "เครื่องตัดกระจก",
                "description": "เครื่องตัดกระจกคุณภาพสูงถูกซ่อนไว้ในตู้ของภารโรงใกล้ห้องจัดแสดง ด้ามจับถูกดัดแปลงเป็นพิเศษ",
                "location": "ตู้ภารโรง",
            },
            "clue-001-3": {
                "title": "ตารางงานพนักงาน",
                "description": "ตารางงานแสดงว่าเจมส์ มิลเลอร์ลาป่วยกะทันหันในคืนเกิดเหตุ ทำให้ทีมรักษาความปลอดภัยมีคนน้อยกว่าปกติ",
                "location": "สำนักงานธุรการ",
            },
        },
        "suspects": {
            "suspect-001-1": {
                "description": "เจ้าหน้าที่รักษาความปลอดภัยที่ลาป่วยในคืนเกิดเหตุ ทำงานที่พิพิธภัณฑ์มา 12 ปี",
                "alibi": "อ้างว่าอยู่บ้านเพราะอาหารเป็นพิษ ไม่มีพยานยืนยัน",
            },
            "suspect-001-2": {
                "description": "นักโจรกรรมงานศิลปะมืออาชีพที่มีชื่อเสียงทั่วยุโรป เพิ่งถูกพบเห็นในเมือง",
                "alibi": "อ้างว่าอยู่ที่บาร์ของโรงแรม บาร์เทนเดอร์ยืนยัน แต่มีช่วง 20 นาทีที่เธอออกไป \"รับโทรศัพท์\"",
            },
            "suspect-001-3": {
                "description": "ภัณฑารักษ์ผู้ดูแลนิทรรศการอัญมณี มีความรู้เรื่องระบบรักษาความปลอดภัยเป็นอย่างดี",
                "alibi": "อยู่ในงานเลี้ยงระดมทุนอีกฝั่งของเมือง มีพยานหลายคน แต่เขากลับก่อนโดยอ้างว่าปวดศีรษะ",
            },
        },
    },
}


# ---------------------------------------------------------------------------
# Sample case for development fallback
#
# Deliberately loose, the way a model payload would be: no ids, one clue with
# an unsupported type. It is mapped through the same code as real output.
# ---------------------------------------------------------------------------

FALLBACK_CASE_PAYLOAD: Dict[str, Any] = {
    "case": {
        "title": "The Missing Artifact",
        "description": (
            "A valuable artifact has disappeared from the city museum. You need to investigate "
            "the clues and interview the suspects to solve the case."
        ),
        "summary": "Solve the mysterious theft at the city museum.",
        "difficulty": "medium",
        "location": "City Museum",
    },
    "clues": [
        {
            "title": "Security Footage",
            "description": "Security camera was disabled between 1:00 AM and 1:15 AM on the night of the theft.",
            "location": "Security Office",
            "type": "digital",
            "relevance": "critical",
        },
        {
            "title": "Footprints",
            "description": "Small footprints found near the display case.",
            "location": "Exhibition Hall",
            "type": "physical",
            "relevance": "important",
        },
        {
            "title": "Staff Schedule",
            "description": "List of staff members who were on duty the night of the theft.",
            "location": "Manager's Office",
            "type": "document",
            "relevance": "important",
        },
    ],
    "suspects": [
        {
            "name": "Security Guard",
            "description": "Night security guard who was on duty",
            "background": "Has worked at the museum for 5 years with a clean record",
            "motive": "Financial troubles recently",
            "alibi": "Claims to have been patrolling the east wing at the time of the theft",
            "isGuilty": False,
        },
        {
            "name": "Curator",
            "description": "Museum curator who has extensive knowledge of the artifact",
            "background": "Respected expert in the field with publications about the artifact",
            "motive": "Recent conflicts with museum management about the artifact's display",
            "alibi": "Claims to have been at home sleeping",
            "isGuilty": True,
        },
    ],
    "solution": "The curator took the artifact because they believed it wasn't being properly preserved.",
}

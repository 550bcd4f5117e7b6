from __future__ import annotations

import random
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pandas as pd
from faker import Faker

from data.functions_client import AdCopyRequest, AdCopyResult, BillText


fake = Faker("en_US")


DEMO_ORG_ID = "00000000-0000-4000-8000-000000000001"

ORGANIZATIONS = [
    (DEMO_ORG_ID, "Progress Forward PAC", "progress-forward"),
    ("00000000-0000-4000-8000-000000000002", "Keystone Voters Alliance", "keystone-voters"),
    ("00000000-0000-4000-8000-000000000003", "Rivera for Congress", "rivera-for-congress"),
    ("00000000-0000-4000-8000-000000000004", "Clean Water Action Fund", "clean-water-fund"),
]

STATES = ["CA", "NY", "TX", "FL", "PA", "IL", "OH", "GA", "NC", "MI", "WA", "AZ", "MA", "VA", "CO"]
STATE_WEIGHTS = [14, 11, 9, 8, 7, 6, 5, 5, 5, 4, 4, 3, 3, 3, 3]

OCCUPATIONS = [
    "Retired",
    "Teacher",
    "Attorney",
    "Physician",
    "Software Engineer",
    "Nurse",
    "Consultant",
    "Professor",
    "Not Employed",
    "Small Business Owner",
    "Writer",
    "Social Worker",
]

REFCODES = [
    "jp_meta_0312",
    "th_fb_lookalike",
    "meta_retarget_q2",
    "txt_rapid_response",
    "sms_match_48h",
    "em_newsletter_apr",
    "email_eoq_push",
    "newsletter_weekly",
    "website_footer",
    "partner_list_swap",
]

SOURCE_CAMPAIGNS = ["meta_prospecting", "sms_rapid_response", "email_eoq", "organic", None]

CONTRIBUTION_FORMS = ["main-donate", "sms-express", "em_monthly", "rapid-response", None]

ACTION_TYPES = ["sms", "email", "social", "ad"]

TOPICS = [
    "Medicare drug pricing vote",
    "Supreme Court ethics ruling",
    "Clean water funding cuts",
    "Voting rights bill markup",
    "Student debt relief deadline",
    "Heat wave emergency declaration",
    "Minimum wage ballot initiative",
    "Rural hospital closures",
]


def _utc_iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def transactions_mock(org_id: Optional[str] = None, n_rows: int = 2500, days: int = 400) -> pd.DataFrame:
    org_id = org_id or DEMO_ORG_ID
    # Seeded per organization: stable across reruns, different across orgs
    random.seed(f"transactions:{org_id}")
    fake.seed_instance(f"transactions:{org_id}")
    now = datetime.now(timezone.utc)

    # A pool of repeat donors so unique donors < transactions
    donors = []
    for _ in range(max(1, n_rows // 3)):
        first, last = fake.first_name(), fake.last_name()
        state = random.choices(STATES, weights=STATE_WEIGHTS)[0]
        donors.append(
            {
                "first_name": first,
                "last_name": last,
                "donor_email": f"{first}.{last}{random.randint(1, 999)}@{fake.free_email_domain()}".lower(),
                "state": state,
                "city": fake.city(),
                "occupation": random.choice(OCCUPATIONS + [None, None]),
                "employer": random.choice([fake.company(), "Self-Employed", "Retired", None]),
                "is_recurring": random.random() < 0.22,
            }
        )

    rows = []
    for i in range(n_rows):
        donor = random.choice(donors)
        ts = now - timedelta(days=random.uniform(0, days))
        amount = round(random.choice([5, 10, 15, 25, 27, 50, 100, 250, 500]) * random.uniform(0.9, 1.1), 2)
        kind = "refund" if random.random() < 0.02 else "donation"
        refcode = random.choice(REFCODES) if random.random() < 0.7 else None
        has_click = refcode is not None and refcode.startswith(("jp", "th", "meta")) and random.random() < 0.4
        signed = -amount if kind == "refund" else amount
        rows.append(
            {
                "id": i + 1,
                "transaction_id": f"AB{random.randint(10_000_000, 99_999_999)}",
                "organization_id": org_id,
                "transaction_date": _utc_iso(ts),
                "transaction_type": kind,
                "amount": signed,
                "net_amount": round(signed * 0.9605 - (0.30 if kind == "donation" else 0.0), 2),
                "donor_email": donor["donor_email"],
                "donor_name": f"{donor['first_name']} {donor['last_name']}",
                "first_name": donor["first_name"],
                "last_name": donor["last_name"],
                "state": donor["state"],
                "city": donor["city"],
                "occupation": donor["occupation"],
                "employer": donor["employer"],
                "refcode": refcode,
                "source_campaign": random.choice(SOURCE_CAMPAIGNS),
                "contribution_form": random.choice(CONTRIBUTION_FORMS),
                "click_id": fake.uuid4() if has_click else None,
                "fbclid": None,
                "is_recurring": donor["is_recurring"],
                "is_express": random.random() < 0.3,
            }
        )
    return pd.DataFrame(rows).sort_values("transaction_date", ascending=False).reset_index(drop=True)


def organizations_mock() -> pd.DataFrame:
    random.seed(3)
    rows = []
    for org_id, name, slug in ORGANIZATIONS:
        rows.append(
            {
                "id": org_id,
                "name": name,
                "slug": slug,
                "is_active": True,
                "primary_contact_email": f"ops@{slug}.org",
                "created_at": _utc_iso(datetime.now(timezone.utc) - timedelta(days=random.randint(60, 700))),
            }
        )
    return pd.DataFrame(rows).sort_values("name").reset_index(drop=True)


def suggested_actions_mock(org_id: Optional[str] = None, n_rows: int = 14) -> pd.DataFrame:
    random.seed(23)
    org_id = org_id or DEMO_ORG_ID
    now = datetime.now(timezone.utc)
    rows = []
    for i in range(n_rows):
        topic = TOPICS[i % len(TOPICS)]
        urgency = random.randint(20, 98)
        copy = (
            f"BREAKING: {topic}. We have 48 hours to respond. "
            f"Chip in $15 now to fight back: act.example.org/r{i}"
        )
        rows.append(
            {
                "id": f"act-{i + 1:03d}",
                "organization_id": org_id,
                "topic": topic,
                "action_type": random.choice(ACTION_TYPES),
                "suggested_copy": copy,
                "urgency_score": urgency,
                "topic_relevance": random.randint(30, 95),
                "decision_score": max(0, min(100, urgency + random.randint(-15, 10))),
                "fit_score": random.randint(35, 95),
                "risk_score": random.choice([None, random.randint(20, 95)]),
                "confidence_score": random.choice([None, random.randint(30, 90)]),
                "estimated_impact": f"${random.randint(2, 40) * 250:,} est. raise",
                "audience_segment": random.choice(["Active supporters", "Lapsed donors", "High-dollar", None]),
                "character_count": len(copy),
                "is_used": i % 5 == 4,
                "is_dismissed": False,
                "used_at": None,
                "created_at": _utc_iso(now - timedelta(hours=random.randint(1, 24 * 14))),
            }
        )
    return pd.DataFrame(rows)


BILLS = [
    ("HR1234", "hr", "Lower Drug Costs Now Act", "Pallone", "D", "NJ", "Passed House"),
    ("S567", "s", "Clean Water Infrastructure Act", "Carper", "D", "DE", "In Committee"),
    ("HRES876", "hres", "Condemning attacks on election workers", "Raskin", "D", "MD", "Introduced"),
    ("HR4410", "hr", "Freedom to Vote Act", "Sarbanes", "D", "MD", "Reported by Committee"),
    ("S2210", "s", "Rural Hospital Stabilization Act", "Tester", "D", "MT", "Introduced"),
    ("HR902", "hr", "Student Loan Fairness Act", "Khanna", "D", "CA", "In Committee"),
]


def bills_mock() -> pd.DataFrame:
    random.seed(29)
    today = date.today()
    rows = []
    for i, (number, kind, title, sponsor, party, state, status) in enumerate(BILLS):
        introduced = today - timedelta(days=random.randint(40, 300))
        latest = introduced + timedelta(days=random.randint(5, 35))
        rows.append(
            {
                "id": f"bill-{i + 1:03d}",
                "bill_number": number,
                "bill_type": kind,
                "congress": 119,
                "title": title,
                "short_title": title,
                "sponsor_name": f"Rep. {sponsor}" if kind.startswith("h") else f"Sen. {sponsor}",
                "sponsor_party": party,
                "sponsor_state": state,
                "current_status": status,
                "introduced_date": introduced.isoformat(),
                "latest_action_date": latest.isoformat(),
                "latest_action_text": f"{status}.",
                "relevance_score": random.randint(40, 95),
            }
        )
    return pd.DataFrame(rows).sort_values("latest_action_date", ascending=False).reset_index(drop=True)


def bill_actions_mock(bill_id: str) -> pd.DataFrame:
    random.seed(sum(ord(c) for c in bill_id))
    start = date.today() - timedelta(days=random.randint(60, 200))
    steps = [
        ("House", "Introduced in House"),
        ("House", "Referred to the Committee on Energy and Commerce"),
        ("House", "Committee hearings held"),
        ("House", "Ordered to be reported"),
        ("House", "Passed/agreed to in House"),
    ]
    rows = []
    day = start
    for i, (chamber, text) in enumerate(steps[: random.randint(2, len(steps))]):
        rows.append(
            {"id": f"{bill_id}-a{i + 1}", "bill_id": bill_id, "action_date": day.isoformat(), "action_text": text, "chamber": chamber}
        )
        day += timedelta(days=random.randint(3, 30))
    return pd.DataFrame(rows).sort_values("action_date", ascending=False).reset_index(drop=True)


def bill_text_mock(bill_number: str) -> BillText:
    fake.seed_instance(31)
    paragraphs = "\n\n".join(fake.paragraph(nb_sentences=6) for _ in range(4))
    text = (
        f"{bill_number.upper()}\n\nA BILL\n\n"
        "Be it enacted by the Senate and House of Representatives of the United States "
        "of America in Congress assembled,\n\n"
        f"SECTION 1. SHORT TITLE.\n\n{paragraphs}"
    )
    return BillText(bill_number=bill_number, text=text)


def contact_submissions_mock(n_rows: int = 18) -> pd.DataFrame:
    random.seed(37)
    fake.seed_instance(37)
    now = datetime.now(timezone.utc)
    rows = []
    for i in range(n_rows):
        status = random.choices(["new", "in_progress", "resolved", "archived"], weights=[5, 3, 3, 1])[0]
        created = now - timedelta(hours=random.randint(1, 24 * 45))
        rows.append(
            {
                "id": f"sub-{i + 1:03d}",
                "name": fake.name(),
                "email": fake.email(),
                "organization_type": random.choice(["Campaign", "PAC", "Nonprofit", "Party committee", None]),
                "campaign": random.choice(["Federal", "Statewide", "Local", "Ballot Measure", None]),
                "message": fake.paragraph(nb_sentences=3),
                "status": status,
                "priority": random.choice(["low", "medium", "medium", "high"]),
                "created_at": _utc_iso(created),
                "resolved_at": _utc_iso(created + timedelta(days=2)) if status == "resolved" else None,
            }
        )
    return pd.DataFrame(rows).sort_values("created_at", ascending=False).reset_index(drop=True)


TRANSCRIPT_TOPICS = [
    ("Prescription drug prices", "healthcare", "urgent"),
    ("Clean water funding", "environment", "hopeful"),
    ("Voting rights", "democracy", "angry"),
    ("Child care costs", "economy", "grateful"),
]


def transcripts_mock(org_id: Optional[str]) -> pd.DataFrame:
    random.seed(f"transcripts:{org_id}")
    fake.seed_instance(41)
    now = datetime.now(timezone.utc)
    rows = []
    for i, (issue, topic, tone) in enumerate(TRANSCRIPT_TOPICS):
        rows.append(
            {
                "id": f"tr-{i + 1:03d}",
                "organization_id": org_id or DEMO_ORG_ID,
                "ad_id": str(random.randint(10**14, 10**15 - 1)),
                "issue_primary": issue,
                "topic_primary": topic,
                "tone_primary": tone,
                "hook_text": fake.sentence(nb_words=12),
                "created_at": _utc_iso(now - timedelta(days=3 * i + 1)),
            }
        )
    return pd.DataFrame(rows)


def ad_copy_mock(request: AdCopyRequest) -> AdCopyResult:
    transcripts = transcripts_mock(request.organization_id)
    match = transcripts[transcripts["id"] == request.transcript_id]
    issue = match.iloc[0]["issue_primary"] if not match.empty else "this fight"
    segments = {}
    for segment in request.audience_segments:
        segments[segment.name] = {
            "primary_texts": [
                f"{issue} is on the line, and we need {segment.name.lower()} in this fight. Every dollar goes straight to the ground game.",
                f"They're counting on us staying quiet about {issue.lower()}. Prove them wrong: chip in today.",
            ],
            "headlines": [f"Stand Up On {issue.title()}"[:40], "Chip In Before Midnight"],
            "descriptions": ["Every gift is matched.", "People-powered."],
        }
    return AdCopyResult.from_segments(
        segments,
        generation_id=f"demo-{request.transcript_id}",
        tracking_url=f"https://secure.actblue.com/donate/{request.actblue_form_name}?refcode={request.refcode}",
    )

"""Built-in questions used when no bank can be loaded.

One question per topic and difficulty tier, so every request resolves to at
least some content.
"""

from __future__ import annotations

from typing import List

from .schemas import Question, normalize_record

FALLBACK_RECORDS = [
    # basics
    {"topic": "basics", "difficulty": "easy",
     "q": "What does a health plan deductible represent?",
     "choices": ["The fixed amount paid per doctor visit", "The maximum you'll pay in a year",
                 "The amount you pay before the plan starts sharing costs",
                 "The amount the employer contributes monthly"],
     "answer": 2,
     "explain": "The deductible is what a member pays for covered services before the plan starts sharing costs (coinsurance).",
     "why": "Deductibles shape member cost exposure and influence plan selection."},
    {"topic": "basics", "difficulty": "intermediate",
     "q": "Which expenses count toward the out-of-pocket maximum on most ACA-compliant plans?",
     "choices": ["Premiums only", "Deductible, coinsurance, and copays for covered in-network care",
                 "Balance bills from out-of-network providers", "Costs for non-covered services"],
     "answer": 1,
     "explain": "The OOPM caps member cost sharing for covered in-network services; premiums and non-covered care do not count."},
    {"topic": "basics", "difficulty": "expert",
     "q": "Under an embedded deductible on a family HDHP, when does coinsurance begin for one member?",
     "choices": ["Only after the full family deductible is met",
                 "When that member meets the individual deductible embedded in the family amount",
                 "Immediately, since HDHPs have no individual limits",
                 "After the employer HSA contribution is exhausted"],
     "answer": 1,
     "explain": "An embedded deductible lets an individual start cost sharing after meeting their own portion of the family deductible."},
    # ancillary
    {"topic": "ancillary", "difficulty": "easy",
     "q": "Which is commonly an ancillary benefit?",
     "choices": ["Dental", "Inpatient surgery", "Hospital room and board", "Chemotherapy"],
     "answer": 0,
     "explain": "Ancillary benefits commonly include dental, vision, life, and disability.",
     "why": "Ancillary benefits round out total rewards and improve retention."},
    {"topic": "ancillary", "difficulty": "intermediate",
     "q": "If an employer pays the full long-term disability premium with pre-tax dollars, how are benefits typically taxed?",
     "choices": ["Tax-free to the employee", "Taxable income to the employee",
                 "Taxed only above $50,000", "Taxed to the employer instead"],
     "answer": 1,
     "explain": "Employer-paid, pre-tax LTD premiums make the resulting benefits taxable to the recipient."},
    {"topic": "ancillary", "difficulty": "expert",
     "q": "Group term life coverage above which amount creates imputed income for the employee?",
     "choices": ["$10,000", "$25,000", "$50,000", "$100,000"],
     "answer": 2,
     "explain": "IRC Section 79 treats the cost of employer-provided group term life above $50,000 as imputed income."},
    # funding
    {"topic": "funding", "difficulty": "easy",
     "q": "In a fully insured plan, who bears the claims risk?",
     "choices": ["The employer", "The insurance carrier", "The employees", "The third-party administrator"],
     "answer": 1,
     "explain": "A fully insured employer pays a fixed premium and the carrier assumes the claims risk."},
    {"topic": "funding", "difficulty": "intermediate",
     "q": "In self-funded plans, which layer primarily protects the plan from a single high-cost claimant?",
     "choices": ["Aggregate stop-loss", "Specific stop-loss",
                 "Administrative services only (ASO) fee", "Pooling charge on fully insured"],
     "answer": 1,
     "explain": "Specific stop-loss caps exposure from a single claimant; aggregate caps total claims.",
     "why": "Choosing correct attachment points is critical to risk management."},
    {"topic": "funding", "difficulty": "expert",
     "q": "What does a 'lasered' individual on a stop-loss contract mean?",
     "choices": ["The claimant is excluded from all coverage",
                 "The claimant has a higher specific deductible set by the stop-loss carrier",
                 "The claimant's claims are paid first", "The claimant moves to the aggregate layer only"],
     "answer": 1,
     "explain": "Lasering assigns a known high-cost claimant a separate, higher specific deductible at renewal."},
    # compliance
    {"topic": "compliance", "difficulty": "easy",
     "q": "COBRA primarily provides what?",
     "choices": ["Subsidized coverage for low-income individuals",
                 "Continuation of employer coverage after qualifying events",
                 "Medicare enrollment assistance", "A federal premium tax credit"],
     "answer": 1,
     "explain": "COBRA allows qualified beneficiaries to continue employer coverage after certain events.",
     "why": "COBRA compliance protects employers from penalties and employees from gaps."},
    {"topic": "compliance", "difficulty": "intermediate",
     "q": "How long does a qualified beneficiary generally have to elect COBRA after receiving the election notice?",
     "choices": ["30 days", "45 days", "60 days", "90 days"],
     "answer": 2,
     "explain": "The COBRA election period is at least 60 days from the later of the notice date or loss of coverage."},
    {"topic": "compliance", "difficulty": "expert",
     "q": "Under MHPAEA, what must a plan show for a nonquantitative treatment limitation on mental health benefits?",
     "choices": ["That it is applied no more stringently than to medical/surgical benefits",
                 "That it saves at least 10 percent of claims cost",
                 "That the state insurance department approved it",
                 "That employees waived parity in writing"],
     "answer": 0,
     "explain": "NQTLs for MH/SUD must be comparable to and applied no more stringently than those for medical/surgical benefits."},
    # sales
    {"topic": "sales", "difficulty": "easy",
     "q": "What is the first step in a consultative benefits sale?",
     "choices": ["Quoting the lowest premium", "Discovery of the client's goals and pain points",
                 "Sending an enrollment guide", "Negotiating commission"],
     "answer": 1,
     "explain": "Discovery uncovers goals and pain points so recommendations address real needs."},
    {"topic": "sales", "difficulty": "intermediate",
     "q": "Which metric best signals an opportunity for condition-management programs?",
     "choices": ["High generic dispense rate", "Rising avoidable ER utilization",
                 "Stable preventive visit rates", "Low telehealth adoption"],
     "answer": 1,
     "explain": "Avoidable ER spikes often flag gaps in primary care access or adherence, ripe for management.",
     "why": "Targeting clinical drivers can bend trend without blunt cost shifting."},
    {"topic": "sales", "difficulty": "expert",
     "q": "When presenting a move to level-funding, which data point most strengthens the ROI story?",
     "choices": ["The carrier's brand recognition", "Historical claims experience versus expected claims",
                 "The number of plan options offered", "The open enrollment date"],
     "answer": 1,
     "explain": "Favorable claims experience relative to expected claims shows the surplus potential of level-funding."},
]


def fallback_questions() -> List[Question]:
    """Return a fresh list of the built-in questions."""
    return [normalize_record(r, source="fallback") for r in FALLBACK_RECORDS]

import logging
from typing import Optional

from django.db import transaction

from core.exceptions import AlreadySeeded, NoValidSymptoms, NotAuthorized, NotFound
from core.models import Symptom, SymptomCheck, SymptomCheckEntry, User
from core.services.audit import log_action
from core.services.triage import classify

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 'Not specified'

CATALOG = [
    {
        'name': 'Postpartum Bleeding (Heavy)',
        'description': 'Heavy vaginal bleeding that soaks through one or more pads per hour for more than 2 hours.',
        'severity': Symptom.SEVERITY_EMERGENCY,
        'common_causes': ['Retained placenta', 'Uterine atony', 'Trauma during delivery'],
        'recommended_actions': ['Seek emergency medical care immediately'],
        'seek_medical_attention': True,
        'related_symptoms': ['Dizziness', 'Weakness', 'Rapid heart rate'],
        'category': 'physical',
    },
    {
        'name': 'Postpartum Bleeding (Normal)',
        'description': 'Normal vaginal discharge (lochia) that changes from red to pink to white over weeks.',
        'severity': Symptom.SEVERITY_MILD,
        'common_causes': ['Normal postpartum recovery'],
        'recommended_actions': ['Monitor for changes', 'Use sanitary pads'],
        'seek_medical_attention': False,
        'related_symptoms': [],
        'category': 'physical',
    },
    {
        'name': 'Severe Headache',
        'description': 'Intense headache that may be accompanied by vision changes.',
        'severity': Symptom.SEVERITY_SEVERE,
        'common_causes': ['Preeclampsia', 'Hormonal changes', 'Dehydration', 'Lack of sleep'],
        'recommended_actions': ['Contact healthcare provider immediately'],
        'seek_medical_attention': True,
        'related_symptoms': ['Vision changes', 'Swelling', 'Upper abdominal pain'],
        'category': 'physical',
    },
    {
        'name': 'Breast Engorgement',
        'description': 'Swollen, firm, tender breasts as milk comes in.',
        'severity': Symptom.SEVERITY_MODERATE,
        'common_causes': ['Milk production', 'Milk stasis'],
        'recommended_actions': ['Frequent breastfeeding', 'Cold compresses', 'Gentle massage'],
        'seek_medical_attention': False,
        'related_symptoms': ['Discomfort', 'Warmth', 'Hardness'],
        'category': 'breastfeeding',
    },
    {
        'name': 'Mastitis',
        'description': 'Breast inflammation often with redness, pain, and flu-like symptoms.',
        'severity': Symptom.SEVERITY_MODERATE,
        'common_causes': ['Blocked milk duct', 'Bacterial infection'],
        'recommended_actions': ['Continue breastfeeding', 'Contact healthcare provider'],
        'seek_medical_attention': True,
        'related_symptoms': ['Fever', 'Chills', 'Fatigue', 'Body aches'],
        'category': 'breastfeeding',
    },
    {
        'name': 'Baby Blues',
        'description': 'Mild mood changes, tearfulness in the first two weeks after delivery.',
        'severity': Symptom.SEVERITY_MILD,
        'common_causes': ['Hormonal changes', 'Lack of sleep', 'Adjustment to new role'],
        'recommended_actions': ['Rest', 'Accept help', 'Talk about feelings'],
        'seek_medical_attention': False,
        'related_symptoms': ['Irritability', 'Anxiety', 'Mood swings', 'Crying'],
        'category': 'emotional',
    },
    {
        'name': 'Postpartum Depression',
        'description': 'Persistent feelings of sadness, hopelessness, or overwhelm lasting more than two weeks.',
        'severity': Symptom.SEVERITY_SEVERE,
        'common_causes': ['Hormonal changes', 'History of depression', 'Difficult delivery', 'Lack of support'],
        'recommended_actions': ['Contact healthcare provider', 'Seek counseling'],
        'seek_medical_attention': True,
        'related_symptoms': ['Loss of interest', 'Changes in appetite', 'Fatigue', 'Thoughts of harming self or baby'],
        'category': 'emotional',
    },
    {
        'name': 'Perineal Pain',
        'description': 'Pain in the area between vagina and rectum following vaginal delivery.',
        'severity': Symptom.SEVERITY_MODERATE,
        'common_causes': ['Episiotomy', 'Tearing during delivery'],
        'recommended_actions': ['Sitz baths', 'Cold packs', 'Pain medication as prescribed'],
        'seek_medical_attention': False,
        'related_symptoms': ['Swelling', 'Bruising', 'Discomfort when sitting'],
        'category': 'physical',
    },
    {
        'name': 'C-Section Incision Pain',
        'description': 'Pain at the incision site following cesarean delivery.',
        'severity': Symptom.SEVERITY_MODERATE,
        'common_causes': ['Surgical wound healing'],
        'recommended_actions': ['Take prescribed pain medication', 'Avoid heavy lifting'],
        'seek_medical_attention': False,
        'related_symptoms': ['Redness', 'Swelling'],
        'category': 'physical',
    },
    {
        'name': 'C-Section Infection',
        'description': 'Signs of infection at the incision site including increasing pain, redness, warmth, or discharge.',
        'severity': Symptom.SEVERITY_SEVERE,
        'common_causes': ['Bacterial infection'],
        'recommended_actions': ['Contact healthcare provider immediately'],
        'seek_medical_attention': True,
        'related_symptoms': ['Fever', 'Foul-smelling discharge', 'Increased pain'],
        'category': 'physical',
    },
]


def format_symptom(s: Symptom) -> dict:
    return {
        'id': s.id,
        'name': s.name,
        'description': s.description,
        'severity': s.severity,
        'commonCauses': s.common_causes,
        'recommendedActions': s.recommended_actions,
        'seekMedicalAttention': s.seek_medical_attention,
        'relatedSymptoms': s.related_symptoms,
        'category': s.category,
    }


def format_check(chk: SymptomCheck) -> dict:
    return {
        'id': chk.id,
        'user': chk.user_id,
        'tier': chk.tier,
        'symptoms': [
            {'symptom': format_symptom(e.symptom), 'severity': e.severity, 'duration': e.duration}
            for e in chk.entries.all()
        ],
        'assessment': chk.assessment,
        'recommendation': chk.recommendation,
        'seekMedicalAttention': chk.seek_medical_attention,
        'createdAt': chk.created_at.isoformat() if chk.created_at else None,
    }


def list_symptoms(category: Optional[str]=None) -> list[dict]:
    qs = Symptom.objects.all()
    if category:
        qs = qs.filter(category=category)
    return [format_symptom(s) for s in qs.order_by('name')]


def catalog_seeded() -> bool:
    return Symptom.objects.exists()


@transaction.atomic
def load_symptom_catalog() -> int:
    """Insert the reference catalog into an empty table; returns the row count."""
    if Symptom.objects.exists():
        raise AlreadySeeded()
    Symptom.objects.bulk_create([Symptom(**row) for row in CATALOG])
    logger.info('Seeded %d reference symptoms', len(CATALOG))
    return len(CATALOG)


def seed_reference_symptoms(actor: User) -> int:
    if getattr(actor, 'role', '') != User.ROLE_ADMIN:
        raise NotAuthorized()
    with transaction.atomic():
        count = load_symptom_catalog()
        log_action(user=actor, action='symptoms_seed', object_type='symptom', detail={'count': count})
    return count


def _check_qs():
    return SymptomCheck.objects.prefetch_related('entries__symptom')


@transaction.atomic
def assess(user: User, reported: list[dict]) -> SymptomCheck:
    """Classify and store one symptom-checker submission.

    ``reported`` holds ``{'symptom': id, 'severity': int, 'duration': str}``
    items.  Ids that do not resolve to a catalog symptom are skipped; if none
    resolve the whole submission is rejected.
    """
    if not reported:
        raise NoValidSymptoms()
    known = Symptom.objects.in_bulk({r['symptom'] for r in reported})
    resolved = [(r, known[r['symptom']]) for r in reported if r['symptom'] in known]
    if not resolved:
        raise NoValidSymptoms()

    outcome = classify(symptom.severity for _, symptom in resolved)
    chk = SymptomCheck.objects.create(
        user=user,
        tier=outcome.tier.label,
        assessment=outcome.assessment,
        recommendation=outcome.recommendation,
        seek_medical_attention=outcome.seek_medical_attention,
    )
    SymptomCheckEntry.objects.bulk_create([
        SymptomCheckEntry(
            check_run=chk,
            symptom=symptom,
            position=i,
            severity=r['severity'],
            duration=r.get('duration') or DEFAULT_DURATION,
        )
        for i, (r, symptom) in enumerate(resolved)
    ])
    log_action(user=user, action='symptom_check', object_type='symptom_check', object_id=chk.id,
               detail={'tier': chk.tier, 'symptoms': [s.id for _, s in resolved]})
    if outcome.seek_medical_attention:
        logger.warning('Symptom check %s by user %s classified %s', chk.id, user.id, chk.tier)
    else:
        logger.info('Symptom check %s by user %s classified %s', chk.id, user.id, chk.tier)
    return _check_qs().get(id=chk.id)


def history(user: User) -> list[dict]:
    return [format_check(c) for c in _check_qs().filter(user=user).order_by('-created_at', '-id')]


def get_check(check_id, user: User) -> SymptomCheck:
    chk = _check_qs().filter(id=check_id).first()
    if not chk:
        raise NotFound('Symptom check not found')
    if chk.user_id != user.id and getattr(user, 'role', '') != User.ROLE_ADMIN:
        raise NotAuthorized()
    return chk

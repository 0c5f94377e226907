"""
Seed service log: the 21 shifts transcribed from the operational report.

Durations are stored as transcribed, not recomputed from the times.
"""

from __future__ import annotations

from typing import List, Tuple

from duty_report.domain.models import ServiceRecord, ServiceType

_SEED_ROWS: Tuple[Tuple[str, ServiceType, str, str, str, float, str], ...] = (
    # Escala Alunos
    ("1", ServiceType.ALUNO, "28/09/2025", "06:30", "19:00", 12.5, "AL SD OLÍVIA"),
    ("2", ServiceType.ALUNO, "01/11/2025", "18:30", "07:00", 12.5, "AL SD OLÍVIA"),
    ("3", ServiceType.ALUNO, "27/09/2025", "18:30", "07:00", 12.5, "AL SD LÉLLIS"),
    ("4", ServiceType.ALUNO, "27/10/2025", "18:30", "07:00", 12.5, "AL SD LÉLLIS"),
    ("5", ServiceType.ALUNO, "27/09/2025", "18:30", "07:00", 12.5, "AL SD NAARA"),
    ("6", ServiceType.ALUNO, "28/09/2025", "07:00", "12:30", 5.5, "AL SD NAARA"),
    ("7", ServiceType.ALUNO, "28/09/2025", "18:30", "07:00", 12.5, "AL SD MATHEUS ANTÔNIO"),
    # Serviço Interno & REDS
    ("8", ServiceType.INTERNO, "24/09/2025", "06:00", "10:00", 4.0, "GENERICO"),
    ("9", ServiceType.INTERNO, "25/09/2025", "06:00", "10:00", 4.0, "GENERICO"),
    ("10", ServiceType.REDS, "25/11/2025", "18:00", "00:00", 6.0, "GENERICO"),
    ("11", ServiceType.REDS, "10/11/2025", "17:30", "00:00", 6.5, "GENERICO"),
    # Sentinela
    ("12", ServiceType.SENTINELA, "18/11/2025", "19:00", "07:00", 12.0, "GENERICO"),
    ("13", ServiceType.SENTINELA, "05/12/2025", "18:30", "07:00", 12.5, "GENERICO"),
    ("14", ServiceType.SENTINELA, "20/11/2025", "19:00", "07:00", 12.0, "GENERICO"),
    # Prado Seguro
    ("15", ServiceType.PRADO_SEGURO, "09/11/2025", "08:30", "15:20", 6.83, "GENERICO"),
    ("16", ServiceType.PRADO_SEGURO, "29/11/2025", "14:00", "20:00", 6.0, "GENERICO"),
    ("17", ServiceType.PRADO_SEGURO, "02/12/2025", "17:30", "00:00", 6.5, "GENERICO"),
    # SAT & Feira Hippie
    ("18", ServiceType.SAT, "01/12/2025", "17:30", "00:00", 6.5, "GENERICO"),
    ("19", ServiceType.SAT, "08/11/2025", "07:00", "22:00", 15.0, "GENERICO"),
    ("20", ServiceType.FEIRA_HIPPIE, "08/11/2025", "07:00", "21:40", 14.6, "GENERICO"),
    ("21", ServiceType.FEIRA_HIPPIE, "09/11/2025", "07:00", "21:00", 14.0, "GENERICO"),
)


def seed_records() -> List[ServiceRecord]:
    """Return a fresh list of the seed records, in transcription order."""
    return [
        ServiceRecord(
            id=record_id,
            type=service_type,
            date=date,
            start_time=start,
            end_time=end,
            duration_hours=hours,
            personnel=personnel,
        )
        for record_id, service_type, date, start, end, hours, personnel in _SEED_ROWS
    ]


__all__ = ["seed_records"]

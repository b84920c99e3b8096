"""API: camada de borda.

Responsabilidades:
- Codec iCalendar (texto <-> CalendarObject)
- Endpoints HTTP do feed (original, padronizado, legado) e health

Subpastas:
- codecs/: parse/serialize do formato iCalendar
- routes/: endpoints HTTP

NÃO PODE conter: orquestração de use cases, regras de padronização.
"""

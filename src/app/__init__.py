"""App: coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelo de dados iCalendar
- use_cases/: casos de uso do feed (pipeline, montagem best-effort)
- services/: serviços de aplicação (canonicalização, cache, padronização)
- workflows/: execução durável de steps e registro de execuções
- infra/: implementações concretas de IO
- protocols/: contratos/interfaces
- observability/: logs estruturados, correlation id, métricas

Padrão: app executa; api adapta; ai padroniza; utils apoia.
"""

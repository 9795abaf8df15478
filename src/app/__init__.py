"""App — orquestração da sessão de busca e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- sessions/: sessão de busca por usuário e registro
- services/: filtros, export CSV e mensagens de erro
- infra/: implementações concretas de IO (Gemini, Redis)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta; ai decide; fsm governa; utils apoia.
"""

"""API — camada de borda HTTP.

Responsabilidades:
- Receber requests e identificar o usuário
- Validar payloads (pydantic)
- Delegar para a sessão de busca e para os stores

Subpastas:
- routes/: endpoints HTTP (prospects, history, health)

NÃO PODE conter: FSM, regras de sessão, chamadas ao modelo.
"""

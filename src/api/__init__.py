"""API — camada de borda e adapters da plataforma de conectores.

Responsabilidades:
- Receber requests HTTP (token, proxy, inbox, composição)
- Validar payloads antes de qualquer I/O
- Normalizar payloads externos para modelos internos
- Encaminhar chamadas autenticadas ao upstream

Subpastas:
- connectors/: cliente HTTP e gateway Rollout
- normalizers/: payloads externos → modelos internos
- validators/: validação de requisições
- routes/: endpoints HTTP

NÃO PODE conter: orquestração de use cases (paginação, reply).
"""

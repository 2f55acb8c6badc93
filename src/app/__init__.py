"""App — orquestração, casos de uso e composition root.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (inbox, reply, envio, credencial ativa)
- services/: serviços de aplicação (emissão de token)
- protocols/: contratos/interfaces e modelos internos
- observability/: correlation_id para logs

Padrão: app executa; api adapta; utils apoia.
"""

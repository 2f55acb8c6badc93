"""Use cases da aplicação (sem IO direto; dependem de protocolos)."""

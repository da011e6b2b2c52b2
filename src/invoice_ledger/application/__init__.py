"""Application layer - Use cases, ports and gateway records.

This layer contains:
- Use Cases: create invoice, record payment (with overpayment policy), delete invoice
- Ports: PersistenceGateway, LockProvider, TimeProvider
- DTOs: InvoiceRecord / PaymentRecord exchanged with the gateway

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""

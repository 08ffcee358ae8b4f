"""Demo Seed: fixture records served by the demo backend.

Invariants:
    - build_seed() returns fresh dicts on every call (callers may mutate them)
    - Ids are "1".."n" per collection; the store continues numbering after the seed
    - Every record carries createdAt/updatedAt stamped with the given time
"""

from datetime import datetime, timedelta

from schooldesk.core.domain_types import Collection

# Generated reports stay downloadable this long
REPORT_TTL_DAYS = 30


def _stamp(records: list[dict], at: str) -> list[dict]:
    return [{**r, "createdAt": at, "updatedAt": at} for r in records]


def build_seed(now: datetime) -> dict[Collection, list[dict]]:
    at = now.isoformat()
    students = [
        {"id": "1", "name": "Juan", "lastName": "Pérez",
         "email": "juan@email.com", "status": "active", "courseId": "1"},
        {"id": "2", "name": "María", "lastName": "García",
         "email": "maria@email.com", "status": "active", "courseId": "2"},
        {"id": "3", "name": "Carlos", "lastName": "López",
         "email": "carlos@email.com", "status": "pending", "courseId": "3"},
    ]
    courses = [
        {"id": "1", "name": "Matemáticas Básicas", "code": "MATH-001",
         "price": 500000, "duration": 40, "maxStudents": 30, "status": "active"},
        {"id": "2", "name": "Español Avanzado", "code": "ESP-001",
         "price": 400000, "duration": 32, "maxStudents": 25, "status": "active"},
        {"id": "3", "name": "Ciencias Naturales", "code": "SCI-001",
         "price": 450000, "duration": 36, "maxStudents": 25, "status": "active"},
    ]
    enrollments = [
        {"id": "1", "studentId": "1", "courseId": "1", "status": "active",
         "enrolledAt": at},
        {"id": "2", "studentId": "2", "courseId": "2", "status": "pending",
         "enrolledAt": at},
        {"id": "3", "studentId": "3", "courseId": "3", "status": "completed",
         "enrolledAt": at, "completedAt": at},
    ]
    payments = [
        {"id": "1", "studentId": "1", "amount": 500000, "status": "completed",
         "method": "cash", "dueDate": at, "paidAt": at},
        {"id": "2", "studentId": "2", "amount": 300000, "status": "pending",
         "method": "card", "dueDate": at},
        {"id": "3", "studentId": "3", "amount": 450000, "status": "completed",
         "method": "transfer", "dueDate": at, "paidAt": at},
    ]
    cash = [
        {"id": "1", "type": "income", "category": "tuition_payment",
         "amount": 500000, "description": "Pago de matrícula - Juan Pérez",
         "status": "confirmed", "transactionDate": at, "userId": "demo-user"},
        {"id": "2", "type": "expense", "category": "salaries",
         "amount": 2000000, "description": "Pago de salarios - Personal docente",
         "status": "confirmed", "transactionDate": at, "userId": "demo-user"},
    ]
    purchases = [
        {"id": "1", "title": "Resmas de papel", "description": "Papel carta x 20",
         "category": "supplies", "amount": 180000, "supplier": "Papelería Central",
         "paymentMethod": "cash", "status": "pending", "purchaseDate": at,
         "requestedBy": "demo-user"},
        {"id": "2", "title": "Proyector aula 3", "description": "Proyector HD",
         "category": "equipment", "amount": 1200000, "supplier": "TecnoAula",
         "paymentMethod": "transfer", "status": "approved", "purchaseDate": at,
         "requestedBy": "demo-user"},
    ]
    reports = [
        {"id": "1", "title": "Resumen de pagos", "description": "Pagos del mes",
         "type": "payment_summary", "format": "pdf", "status": "pending",
         "downloadCount": 0, "requestedBy": "demo-user"},
        {"id": "2", "title": "Flujo de caja", "description": "Ingresos y egresos",
         "type": "cash_flow", "format": "excel", "status": "completed",
         "filePath": "reports/2.excel", "downloadUrl": "/api/demo/reports/2/download",
         "downloadCount": 2, "generatedAt": at,
         "expiresAt": (now + timedelta(days=REPORT_TTL_DAYS)).isoformat(),
         "requestedBy": "demo-user"},
    ]
    return {
        Collection.STUDENTS: _stamp(students, at),
        Collection.COURSES: _stamp(courses, at),
        Collection.ENROLLMENTS: _stamp(enrollments, at),
        Collection.PAYMENTS: _stamp(payments, at),
        Collection.CASH: _stamp(cash, at),
        Collection.PURCHASES: _stamp(purchases, at),
        Collection.REPORTS: _stamp(reports, at),
    }

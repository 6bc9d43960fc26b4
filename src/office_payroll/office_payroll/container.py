from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_RETIREMENT_PERCENTAGE, OFFICE_ACTIVATION_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .offices.mysql_office_repository import MySQLOfficeRepository
from .offices.service import OfficeService
from .payments.deductions import DeductionService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.rollover import MonthRolloverService
from .payments.scoping import PayrollScoper
from .payments.service import PaymentReportService, PaymentService
from .promotions.mysql_promotion_repository import MySQLPromotionRepository
from .promotions.service import PromotionService
from .reports.service import StatutoryReportService
from .users.mysql_account_repository import MySQLAccountRepository
from .users.service import AccountService, AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    accounts_repo: MySQLAccountRepository
    offices_repo: MySQLOfficeRepository
    employees_repo: MySQLEmployeeRepository
    payments_repo: MySQLPaymentRepository
    promotions_repo: MySQLPromotionRepository

    auth_service: AuthService
    account_service: AccountService
    office_service: OfficeService
    employee_service: EmployeeService
    payment_report_service: PaymentReportService
    payment_service: PaymentService
    rollover_service: MonthRolloverService
    deduction_service: DeductionService
    statutory_report_service: StatutoryReportService
    promotion_service: PromotionService


def build_container(
    *,
    db_config: dict,
    retirement_percentage=DEFAULT_RETIREMENT_PERCENTAGE,
    activation_days: int = OFFICE_ACTIVATION_DAYS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    accounts_repo = MySQLAccountRepository(conn)
    offices_repo = MySQLOfficeRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    payments_repo = MySQLPaymentRepository(conn)
    promotions_repo = MySQLPromotionRepository(conn)

    office_service = OfficeService(offices_repo, activation_days=activation_days)
    employee_service = EmployeeService(employees_repo, office_service)
    scoper = PayrollScoper(office_service, employee_service)

    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        offices_repo=offices_repo,
        employees_repo=employees_repo,
        payments_repo=payments_repo,
        promotions_repo=promotions_repo,
        auth_service=AuthService(accounts_repo, offices_repo, activation_days=activation_days),
        account_service=AccountService(accounts_repo),
        office_service=office_service,
        employee_service=employee_service,
        payment_report_service=PaymentReportService(payments_repo, scoper),
        payment_service=PaymentService(payments_repo, office_service, employee_service),
        rollover_service=MonthRolloverService(payments_repo, scoper),
        deduction_service=DeductionService(payments_repo, scoper),
        statutory_report_service=StatutoryReportService(
            payments_repo,
            scoper,
            retirement_percentage=retirement_percentage,
        ),
        promotion_service=PromotionService(promotions_repo, office_service, employee_service),
    )

"""页面对象。"""

from .add_new_order_page import AddNewOrderPage
from .base_page import BasePage
from .dashboard_page import DashboardPage
from .import_orders_page import ImportOrdersPage
from .login_page import LoginPage
from .two_factor_page import TwoFactorPage

__all__ = [
    "AddNewOrderPage",
    "BasePage",
    "DashboardPage",
    "ImportOrdersPage",
    "LoginPage",
    "TwoFactorPage",
]

from models.staff import Staff
from models.menu_management import MenuItem
from models.table_management import Table, Reservation
from models.order_management import Order, OrderItem
from models.billing import Bill

# Register all models
__all__ = ['Staff', 'MenuItem', 'Table', 'Reservation', 'Order', 'OrderItem', 'Bill']

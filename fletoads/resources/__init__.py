from .auth_resource import blp_auth
from .coupon_resource import blp_coupon
from .flyer_resource import blp_flyer
from .integration_resource import blp_integration
from .notification_resource import blp_notification
from .plan_resource import blp_plan
from .product_resource import blp_product
from .resource_limits_resource import blp_resource_limits
from .store_resource import blp_store

from ..resources import (
    blp_auth,
    blp_plan,
    blp_resource_limits,
    blp_flyer,
    blp_product,
    blp_coupon,
    blp_integration,
    blp_store,
    blp_notification,
)


def register_routes(app, api):
    blueprints = [
        blp_auth,
        blp_plan,
        blp_resource_limits,
        blp_flyer,
        blp_product,
        blp_coupon,
        blp_integration,
        blp_store,
        blp_notification,
    ]

    for blueprint in blueprints:
        api.register_blueprint(blueprint, url_prefix="/api")

    # Root route
    @app.route('/')
    def index():
        return {"message": "Welcome to the FletoAds API"}

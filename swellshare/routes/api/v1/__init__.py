from flask import Blueprint

from swellshare.extensions import csrf
from swellshare.routes.api.v1.admin import api_admin_bp
from swellshare.routes.api.v1.auth import api_auth_bp
from swellshare.routes.api.v1.messages import api_message_bp
from swellshare.routes.api.v1.payments import api_payment_bp
from swellshare.routes.api.v1.profiles import api_profile_bp
from swellshare.routes.api.v1.rentals import api_rental_bp
from swellshare.routes.api.v1.surfboards import api_surfboard_bp

api_v1_bp = Blueprint("api_v1", __name__)
api_v1_bp.register_blueprint(api_auth_bp, url_prefix="/auth")
api_v1_bp.register_blueprint(api_profile_bp, url_prefix="/profiles")
api_v1_bp.register_blueprint(api_surfboard_bp, url_prefix="/surfboards")
api_v1_bp.register_blueprint(api_rental_bp, url_prefix="/rentals")
api_v1_bp.register_blueprint(api_message_bp, url_prefix="/rentals")
api_v1_bp.register_blueprint(api_payment_bp, url_prefix="/payments")
api_v1_bp.register_blueprint(api_admin_bp, url_prefix="/admin")

for blueprint in (
    api_v1_bp,
    api_auth_bp,
    api_profile_bp,
    api_surfboard_bp,
    api_rental_bp,
    api_message_bp,
    api_payment_bp,
    api_admin_bp,
):
    csrf.exempt(blueprint)

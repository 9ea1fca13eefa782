"""
Main application routes.
Directory listing, bookshop detail pages and county pages.
"""
from flask import Blueprint, abort, current_app, g, redirect, render_template, request
from indiebookshop.bookshop_source import BookshopSource, BookshopSourceError
from indiebookshop.canonical import (
    build_canonical_paths,
    build_collection_canonical_url,
    build_county_url,
    canonical_path,
)
from indiebookshop.forms import DirectoryFilterForm
from indiebookshop.locations import abbreviation_to_full_name, normalize_county_name
from indiebookshop.redirects import (
    PERMANENT_REDIRECT,
    RedirectAction,
    decide_redirect,
    legacy_redirect_target,
)
from indiebookshop.resolver import (
    ResolutionStatus,
    counties_for_state,
    filter_bookshops,
    resolve,
    resolve_county,
)
from indiebookshop.url_parser import parse_bookshop_path
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('main', __name__)

def load_bookshops():
    """
    Load the bookshop collection for a request.
    
    Upstream failures are logged and treated as an empty collection, so pages
    degrade to "not found" instead of an error.
    """
    try:
        bookshops = BookshopSource.get_bookshops()
    except BookshopSourceError as e:
        logger.error(f"Bookshop data unavailable: {e}")
        bookshops = []
    g.canonical_paths = build_canonical_paths(bookshops)
    return bookshops

@bp.app_template_global()
def bookshop_path(bookshop):
    """Canonical relative link for templates, aware of slug collisions in the loaded collection."""
    paths = g.get('canonical_paths') or {}
    return paths.get(bookshop.id) or canonical_path(bookshop)

@bp.app_template_global()
def state_name(code):
    return abbreviation_to_full_name(code)

@bp.before_app_request
def redirect_legacy_urls():
    """Answer legacy location URLs with a permanent redirect."""
    if request.method != 'GET':
        return None
    target = legacy_redirect_target(request.path)
    if target:
        logger.info(f"Legacy redirect {request.path} -> {target}")
        return redirect(target, code=PERMANENT_REDIRECT)
    return None

@bp.route('/')
@bp.route('/directory')
def directory():
    """Directory listing filtered by state, city and county."""
    form = DirectoryFilterForm(request.args)
    bookshops = load_bookshops()
    
    state = city = county = None
    if form.validate():
        state = form.state.data or None
        city = (form.city.data or '').strip() or None
        county = (form.county.data or '').strip() or None
        results = filter_bookshops(bookshops, state=state, city=city, county=county)
    else:
        logger.info(f"Invalid directory filter: {form.errors}")
        results = []
    
    county_links = []
    if state:
        county_links = [
            (county_name, build_county_url(county_name, state))
            for county_name in counties_for_state(bookshops, state)
        ]
    
    results = sorted(results, key=lambda b: (b.state, b.city.lower(), b.name.lower()))
    
    return render_template('directory.html',
                         form=form,
                         bookshops=results,
                         state=state,
                         city=city,
                         county=county,
                         county_links=county_links)

@bp.route('/bookshop/<path:subpath>')
def bookshop_detail(subpath):
    """Bookshop detail page for every accepted URL shape."""
    requested_path = request.path
    parsed = parse_bookshop_path(requested_path)
    bookshops = load_bookshops()
    resolution = resolve(parsed, bookshops)
    
    canonical_url = None
    if resolution.status is ResolutionStatus.MATCH:
        canonical_url = build_collection_canonical_url(
            resolution.bookshop, bookshops, current_app.config['BASE_URL']
        )
    
    decision = decide_redirect(requested_path, resolution, canonical_url)
    
    if decision.action is RedirectAction.NOT_FOUND:
        logger.info(f"No bookshop found for {requested_path}")
        abort(404)
    
    if decision.action is RedirectAction.DISAMBIGUATE:
        logger.warning(
            f"Ambiguous bookshop URL {requested_path}: "
            f"{len(decision.candidates)} matches"
        )
        return render_template('bookshop_choices.html',
                             requested_path=requested_path,
                             bookshops=decision.candidates)
    
    if decision.action is RedirectAction.REDIRECT:
        logger.info(f"Canonical redirect {requested_path} -> {decision.target}")
        return redirect(decision.target, code=decision.status_code)
    
    return render_template('bookshop.html',
                         bookshop=resolution.bookshop,
                         canonical_url=canonical_url)

@bp.route('/directory/county/<county>')
@bp.route('/directory/county/<state>/<county>')
def county_directory(county, state=None):
    """County page, or a choice of states when the county name is shared."""
    resolution = resolve_county(county.lower(), load_bookshops(),
                                state_segment=state.lower() if state else None)
    
    if resolution.status is ResolutionStatus.NO_MATCH:
        abort(404)
    
    county_display = normalize_county_name(county).title()
    base_url = current_app.config['BASE_URL']
    
    if resolution.status is ResolutionStatus.AMBIGUOUS:
        state_links = [
            (code, build_county_url(county, code), len(shops))
            for code, shops in resolution.by_state
        ]
        return render_template('county_choices.html',
                             county=county_display,
                             state_links=state_links)
    
    # The requested county names the page, not the stored county of a match
    state_code = resolution.states[0]
    return render_template('county.html',
                         county=county_display,
                         state=state_code,
                         bookshops=resolution.matches,
                         canonical_url=build_county_url(county, state_code, base_url))

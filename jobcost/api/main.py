from fastapi import APIRouter

from jobcost.api.routes import (
    categories,
    customers,
    dashboard,
    employees,
    items,
    jobs,
    machine_entries,
    machines,
    reports,
    utils,
)

api_router = APIRouter()
api_router.include_router(utils.router)

# Master data
api_router.include_router(customers.router)
api_router.include_router(categories.router)
api_router.include_router(items.router)
api_router.include_router(machines.router)
api_router.include_router(employees.router)

# Jobs and costing
api_router.include_router(jobs.router)
api_router.include_router(machine_entries.router)

# Dashboard and reports
api_router.include_router(dashboard.router)
api_router.include_router(reports.router)

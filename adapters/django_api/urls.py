"""
Ledger Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("register-applicant", views.register_applicant_view),
    path("apply-for-scholarship", views.apply_for_scholarship_view),
    path("verify-applicant", views.verify_applicant_view),
    path("update-application-status", views.update_application_status_view),
    path("create-scholarship", views.create_scholarship_view),
    path("fund-scholarship", views.fund_scholarship_view),
    path("activate-scholarship", views.activate_scholarship_view),
    path("deactivate-scholarship", views.deactivate_scholarship_view),
    path("register-institution", views.register_institution_view),
    path("create-disbursement", views.create_disbursement_view),
    path("process-disbursement", views.process_disbursement_view),
    path("cancel-disbursement", views.cancel_disbursement_view),
    path("add-academic-record", views.add_academic_record_view),
    path("add-milestone", views.add_milestone_view),
    path("mark-milestone-achieved", views.mark_milestone_achieved_view),
    path("update-record-status", views.update_record_status_view),
    path("applicant/<int:record_id>", views.applicant_view),
    path("application/<int:record_id>", views.application_view),
    path("scholarship/<int:record_id>", views.scholarship_view),
    path("institution/<int:record_id>", views.institution_view),
    path("disbursement/<int:record_id>", views.disbursement_view),
    path("academic-record/<int:record_id>", views.academic_record_view),
    path("milestone/<int:record_id>", views.milestone_view),
    path("applicant-count", views.applicant_count_view),
    path("application-count", views.application_count_view),
    path("scholarship-count", views.scholarship_count_view),
    path("institution-count", views.institution_count_view),
    path("disbursement-count", views.disbursement_count_view),
    path("record-count", views.record_count_view),
    path("milestone-count", views.milestone_count_view),
]

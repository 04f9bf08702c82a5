"""
Testes do formulário de nota (Qt em modo offscreen, diálogos respondidos automaticamente)
"""

from datetime import date

import pytest

from core.pdf_export import NotaPdfExporter
from core.services import CustomerService, NotaService
from ui.nota_form import NotaForm


@pytest.fixture
def services(customers, notas):
    return CustomerService(customers), NotaService(notas)


@pytest.fixture
def make_form(qapp, quiet_dialogs, services, tmp_path):
    customer_service, nota_service = services
    forms = []

    def build(output_dir=None):
        exporter = NotaPdfExporter(output_dir or str(tmp_path / "Notas"))
        form = NotaForm(nota_service, customer_service, exporter)
        forms.append(form)
        return form

    yield build
    for form in forms:
        form.deleteLater()


def test_form_starts_from_service_draft(make_form, services, nota_factory):
    _, nota_service = services
    nota_service.issue(nota_factory())

    form = make_form()

    assert form.lbl_number.text() == "Nº 010002"
    assert form.issue_date.text() == date.today().strftime("%d/%m/%Y")
    assert form.form_nota().number == "010002"


def test_picking_customer_copies_snapshot(make_form, services, maria):
    customer_service, _ = services
    customer_id = customer_service.save(maria)
    form = make_form()

    form.customer_combo.setCurrentIndex(1)
    form.customer_combo.activated.emit(1)

    nota = form.form_nota()
    assert nota.customer_id == customer_id
    assert nota.customer_name == maria.name
    assert nota.customer_cpf == maria.cpf
    assert form.renter.text() == maria.name


def test_typing_over_picked_name_unlinks_customer(make_form, services, maria):
    customer_service, _ = services
    customer_service.save(maria)
    form = make_form()
    form.customer_combo.setCurrentIndex(1)
    form.customer_combo.activated.emit(1)

    form.name.setText("Outra Pessoa")
    form.name.textEdited.emit("Outra Pessoa")

    nota = form.form_nota()
    assert nota.customer_id == 0
    assert nota.customer_name == "Outra Pessoa"
    assert form.customer_combo.currentIndex() == 0


def test_save_survives_pdf_failure(make_form, services, quiet_dialogs, tmp_path):
    _, nota_service = services
    blocker = tmp_path / "bloqueio"
    blocker.write_text("")
    form = make_form(str(blocker / "Notas"))
    refreshed = []
    form.nota_saved_cb = lambda: refreshed.append(True)
    form.name.setText("Cliente Balcão")
    form.description.setPlainText("\n".join(f"Item {i}" for i in range(120)))

    form.save()

    assert [n.customer_name for n in nota_service.list()] == ["Cliente Balcão"]
    assert any(title == "Erro" for title, _ in quiet_dialogs)
    assert refreshed == [True]
    assert form.name.text() == ""
    assert form.lbl_number.text() == "Nº 010002"


def test_save_without_name_shows_warning(make_form, services, quiet_dialogs):
    _, nota_service = services
    form = make_form()

    form.save()

    assert nota_service.list() == []
    assert quiet_dialogs[-1][0] == "Campo Obrigatório"
